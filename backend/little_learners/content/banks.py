from __future__ import annotations

from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict

from .schema import Subject


class BankEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    prompt: str
    answer: str
    options: Tuple[str, str, str]
    visual_hint: str


def _entry(prompt: str, answer: str, options: Tuple[str, str, str], visual_hint: str) -> BankEntry:
    return BankEntry(prompt=prompt, answer=answer, options=options, visual_hint=visual_hint)


# Pre-authored Classic items; each already has 3 distinct options containing the answer once.
ENGLISH_BANK: List[BankEntry] = [
    _entry("Which letter comes after A?", "B", ("B", "D", "C"), "alphabet"),
    _entry("Which word rhymes with Cat?", "Bat", ("Bat", "Dog", "Fish"), "cat"),
    _entry("Find the animal:", "Dog", ("Dog", "Car", "Ball"), "dog"),
    _entry("What is the opposite of Up?", "Down", ("Down", "Left", "Right"), "arrow"),
    _entry("Which letter starts the word Apple?", "A", ("A", "P", "L"), "apple"),
]

SCIENCE_BANK: List[BankEntry] = [
    _entry("Which one is an animal?", "Cow", ("Cow", "Car", "Rock"), "cow"),
    _entry("Where does rain come from?", "Clouds", ("Clouds", "Ground", "Trees"), "cloud"),
    _entry("What color is the Sun?", "Yellow", ("Yellow", "Purple", "Green"), "sun"),
    _entry("Which animal can fly?", "Bird", ("Bird", "Dog", "Fish"), "bird"),
    _entry("What do plants need to grow?", "Water", ("Water", "Candy", "Toys"), "leaf"),
]

BANKS: Dict[Subject, List[BankEntry]] = {
    Subject.ENGLISH: ENGLISH_BANK,
    Subject.SCIENCE: SCIENCE_BANK,
}
