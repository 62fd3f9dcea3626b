"""Sample bodies: one short line of verse per entity."""

PROSE = """\
My wild love went riding,
She rode all the day;
She rode to the devil,
And asked him to pay.

The devil was wiser
It's time to repent;
He asked her to give back
The money she spent

My wild love went riding,
She rode to sea;
She gathered together
Some shells for her hair

She rode on to Christmas,
She rode to the farm;
She rode to Japan
And re-entered a town

My wild love is crazy
She screams like a bird;
She moans like a cat
When she wants to be heard
"""
