"""Random human-friendly names for datatokens created without one."""

from __future__ import annotations

import random

ADJECTIVES = (
    "Adamant", "Adroit", "Amatory", "Animistic", "Antic", "Arcadian", "Baleful",
    "Bellicose", "Bilious", "Boorish", "Calamitous", "Caustic", "Cerulean",
    "Comely", "Concomitant", "Contumacious", "Corpulent", "Crapulous", "Defamatory",
    "Didactic", "Dilatory", "Dowdy", "Efficacious", "Effulgent", "Egregious",
    "Endemic", "Equanimous", "Execrable", "Fastidious", "Feckless", "Fecund",
    "Friable", "Fulsome", "Garrulous", "Guileless", "Gustatory", "Heuristic",
    "Histrionic", "Hubristic", "Incendiary", "Insidious", "Insolent", "Intransigent",
    "Inveterate", "Invidious", "Irksome", "Jejune", "Jocular", "Judicious",
    "Lachrymose", "Limpid", "Loquacious", "Luminous", "Mannered", "Mendacious",
    "Meretricious", "Minatory", "Mordant", "Munificent", "Nefarious", "Noxious",
    "Obtuse", "Parsimonious", "Pendulous", "Pernicious", "Pervasive", "Petulant",
    "Platitudinous", "Precipitate", "Propitious", "Puckish", "Querulous",
    "Quiescent", "Rebarbative", "Recalcitrant", "Redolent", "Rhadamanthine",
    "Risible", "Ruminative", "Sagacious", "Salubrious", "Sartorial", "Sclerotic",
    "Serpentine", "Spasmodic", "Strident", "Taciturn", "Tenacious", "Tremulous",
    "Trenchant", "Turbulent", "Turgid", "Ubiquitous", "Uxorious", "Verdant",
    "Voluble", "Voracious", "Wheedling", "Withering", "Zealous",
)

NOUNS = (
    "Ninja", "Chair", "Pancake", "Statue", "Unicorn", "Rainbows", "Laser",
    "Senor", "Bunny", "Captain", "Nibblets", "Cupcake", "Carrot", "Gnomes",
    "Glitter", "Potato", "Salad", "Toejam", "Curtains", "Beets", "Toilet",
    "Exorcism", "Stick Figures", "Mermaid Eggs", "Sea Barnacles", "Dragons",
    "Jellybeans", "Snakes", "Dolls", "Bushes", "Cookies", "Apples", "Ice Cream",
    "Ukulele", "Kazoo", "Banjo", "Opera Singer", "Circus", "Trampoline",
    "Carousel", "Carnival", "Locomotive", "Hot Air Balloon", "Praying Mantis",
    "Animator", "Artisan", "Artist", "Colorist", "Inker", "Coppersmith",
    "Director", "Designer", "Flatter", "Stylist", "Leadman", "Limner", "Make-Up Artist",
    "Model", "Musician", "Penciller", "Producer", "Scenographer", "Set Decorator",
    "Silversmith", "Teacher", "Auto Mechanic", "Beader", "Bobbin Boy",
    "Clerk Of The Chapel", "Filling Station Attendant", "Foreman", "Maintenance Engineering",
    "Mechanic", "Miller", "Moldmaker", "Panel Beater", "Patternmaker", "Plant Operator",
    "Plumber", "Sawfiler", "Shop Foreman", "Soaper", "Stationary Engineer",
    "Wheelwright", "Woodworkers",
)


def generate_dt_name(rng: random.Random | None = None) -> tuple[str, str]:
    """Generate a datatoken name and symbol.

    The name is "<Adjective> <Noun> Token"; the symbol joins the first three
    letters of each word with a number in [0, 99], upper-cased.

    Returns:
        (name, symbol), e.g. ("Zealous Ninja Token", "ZEANIN-42")
    """
    rng = rng or random.Random()
    adjective = rng.choice(ADJECTIVES)
    noun = rng.choice(NOUNS)
    name = f"{adjective} {noun} Token"
    symbol = f"{adjective[:3]}{noun[:3]}-{rng.randint(0, 99)}".upper()
    return name, symbol


__all__ = ["generate_dt_name"]
