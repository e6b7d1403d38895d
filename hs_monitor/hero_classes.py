"""Hero name to class lookup."""

HERO_CLASSES = {
    "malfurion stormrage": "druid",
    "alleria windrunner": "hunter",
    "rexxar": "hunter",
    "jaina proudmoore": "mage",
    "medivh": "mage",
    "uther lightbringer": "paladin",
    "lady liadrin": "paladin",
    "anduin wrynn": "priest",
    "valeera sanguinar": "rogue",
    "thrall": "shaman",
    "gul'dan": "warlock",
    "garrosh hellscream": "warrior",
    "magni bronzebeard": "warrior",
}


def class_of(hero_name):
    """Return the class id for a hero, or the lower-cased name when unknown."""
    hero_name = hero_name.lower()
    return HERO_CLASSES.get(hero_name, hero_name)
