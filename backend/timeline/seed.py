from datetime import date

from timeline import db
from timeline.models import Card

SAMPLE_CARDS = [
    ("World War II ends", date(1945, 9, 2), "History", 1,
     "Japan formally surrendered aboard the USS Missouri in Tokyo Bay"),
    ("First Moon Landing", date(1969, 7, 20), "Space", 2,
     "Apollo 11 mission successfully lands Neil Armstrong and Buzz Aldrin on the moon"),
    ("Berlin Wall falls", date(1989, 11, 9), "History", 1,
     "The barrier dividing East and West Berlin is torn down"),
    ("iPhone is released", date(2007, 6, 29), "Technology", 1,
     "Apple releases the first iPhone, revolutionizing smartphones"),
    ("Titanic sinks", date(1912, 4, 15), "History", 2,
     "The RMS Titanic sinks on its maiden voyage"),
    ("Wright Brothers first flight", date(1903, 12, 17), "Aviation", 2,
     "First powered, sustained, and controlled heavier-than-air human flight"),
    ("World Wide Web invented", date(1989, 3, 12), "Technology", 2,
     "Tim Berners-Lee proposes the World Wide Web"),
    ("Discovery of DNA structure", date(1953, 4, 25), "Science", 3,
     "Watson and Crick publish their discovery of DNA's double helix structure"),
    ("Fall of Roman Empire", date(476, 9, 4), "History", 3,
     "The last Western Roman Emperor is deposed"),
    ("Printing Press invented", date(1440, 1, 1), "Technology", 2,
     "Johannes Gutenberg invents the printing press with movable type"),
    ("Steam Engine invented", date(1712, 1, 1), "Technology", 2,
     "Thomas Newcomen builds the first practical steam engine"),
    ("American Civil War ends", date(1865, 4, 9), "History", 2,
     "Confederate General Lee surrenders to Union General Grant"),
    ("Personal Computer introduced", date(1975, 1, 1), "Technology", 2,
     "Altair 8800 becomes the first commercially successful personal computer"),
    ("Penicillin discovered", date(1928, 9, 28), "Science", 2,
     "Alexander Fleming discovers penicillin's antibiotic properties"),
    ("Television invented", date(1926, 1, 26), "Technology", 2,
     "John Logie Baird demonstrates the first television broadcast"),
    ("World War II begins", date(1939, 9, 1), "History", 1,
     "Germany invades Poland"),
]


def seed_cards():
    """Insert the sample cards that are not already present. Returns the number added."""
    added = 0
    for title, occurred, category, difficulty, description in SAMPLE_CARDS:
        if Card.query.filter_by(title=title, date_occurred=occurred).first():
            continue
        db.session.add(Card(
            title=title,
            date_occurred=occurred,
            category=category,
            difficulty=difficulty,
            description=description,
        ))
        added += 1
    db.session.commit()
    return added
