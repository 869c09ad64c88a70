"""Follow-up question sets per waste category."""

from dataclasses import dataclass

from ecoconnect.domain.categories import Category, coerce_category

QUESTIONS_PER_ITEM = 4


@dataclass(frozen=True)
class Question:
    """A multiple-choice follow-up question."""

    id: str
    prompt: str
    options: tuple[str, ...]


def _intent(*options: str) -> Question:
    return Question(
        id="intent", prompt="What do you want to do with it?", options=options
    )


_PLASTIC = (
    Question(
        id="condition",
        prompt="What is the current condition?",
        options=(
            "New/Unused",
            "Lightly Used",
            "Moderately Used",
            "Heavily Used",
            "Broken",
        ),
    ),
    Question(
        id="size",
        prompt="What is the approximate size?",
        options=(
            "Small (fits in hand)",
            "Medium (backpack size)",
            "Large (furniture size)",
            "Very Large",
        ),
    ),
    Question(
        id="cleanliness",
        prompt="Is it clean and ready for recycling?",
        options=(
            "Yes, completely clean",
            "Needs minor cleaning",
            "Needs major cleaning",
            "Cannot be cleaned",
        ),
    ),
    _intent(
        "Sell if valuable",
        "Donate to someone",
        "Recycle responsibly",
        "Just dispose safely",
    ),
)

_METAL = (
    Question(
        id="condition",
        prompt="What is the current condition?",
        options=("Excellent", "Good", "Fair", "Poor", "Scrap only"),
    ),
    Question(
        id="weight",
        prompt="Approximate weight?",
        options=(
            "Very light (<1kg)",
            "Light (1-5kg)",
            "Medium (5-20kg)",
            "Heavy (>20kg)",
        ),
    ),
    Question(
        id="type",
        prompt="What type of metal item?",
        options=(
            "Appliance",
            "Vehicle part",
            "Utensil/Tool",
            "Structural/Building",
            "Other",
        ),
    ),
    _intent("Sell as scrap", "Sell as item", "Donate", "Recycle"),
)

_EWASTE = (
    Question(
        id="functionality",
        prompt="Does it still work?",
        options=(
            "Yes, fully functional",
            "Partially working",
            "Not working",
            "Not sure",
        ),
    ),
    Question(
        id="age",
        prompt="How old is the device?",
        options=("Less than 1 year", "1-3 years", "3-5 years", "More than 5 years"),
    ),
    Question(
        id="data",
        prompt="Does it contain personal data?",
        options=(
            "Yes, needs wiping",
            "Already wiped",
            "No data storage",
            "Not applicable",
        ),
    ),
    _intent("Sell if working", "Donate", "E-waste recycling", "Repair first"),
)

_FABRIC = (
    Question(
        id="condition",
        prompt="What is the condition?",
        options=(
            "Like new",
            "Gently used",
            "Worn but usable",
            "Damaged/Torn",
            "Only for recycling",
        ),
    ),
    Question(
        id="quantity",
        prompt="How much fabric/clothing?",
        options=(
            "Single item",
            "Few items (2-5)",
            "Several items (6-10)",
            "Many items (10+)",
        ),
    ),
    Question(
        id="type",
        prompt="What type of fabric items?",
        options=(
            "Clothing",
            "Home textiles (curtains, sheets)",
            "Bags/Accessories",
            "Raw fabric",
        ),
    ),
    _intent("Sell online", "Donate to needy", "Textile recycling", "Upcycle/Reuse"),
)

_GLASS = (
    Question(
        id="condition",
        prompt="What is the condition?",
        options=("Intact", "Chipped/Cracked", "Broken"),
    ),
    Question(
        id="type",
        prompt="What type of glass item?",
        options=("Bottle", "Jar", "Window/Mirror", "Decorative", "Other"),
    ),
    Question(
        id="cleanliness",
        prompt="Is it clean?",
        options=("Yes, clean", "Needs cleaning", "Very dirty"),
    ),
    _intent("Recycle", "Reuse/Repurpose", "Dispose safely"),
)

_PAPER = (
    Question(
        id="type",
        prompt="What type of paper?",
        options=(
            "Newspaper/Magazine",
            "Cardboard/Box",
            "Office paper",
            "Books",
            "Mixed",
        ),
    ),
    Question(
        id="quantity",
        prompt="How much paper?",
        options=(
            "Small amount",
            "Medium (bag full)",
            "Large (multiple bags)",
            "Very large",
        ),
    ),
    Question(
        id="condition",
        prompt="Condition of the paper?",
        options=("Clean and dry", "Slightly soiled", "Wet/damaged", "Mixed quality"),
    ),
    _intent("Recycle", "Sell to scrap dealer", "Donate (books)", "Dispose"),
)

_DEFAULT = (
    Question(
        id="condition",
        prompt="What is the current condition?",
        options=("Excellent", "Good", "Fair", "Poor", "Damaged"),
    ),
    Question(
        id="age",
        prompt="How old is it approximately?",
        options=(
            "Less than 6 months",
            "6 months - 2 years",
            "2-5 years",
            "More than 5 years",
        ),
    ),
    Question(
        id="usability",
        prompt="Can it still be used?",
        options=(
            "Yes, fully usable",
            "With minor repairs",
            "With major repairs",
            "No, beyond repair",
        ),
    ),
    _intent("Sell", "Donate", "Recycle", "Dispose"),
)

_QUESTION_SETS: dict[Category, tuple[Question, ...]] = {
    Category.PLASTIC: _PLASTIC,
    Category.METAL: _METAL,
    Category.EWASTE: _EWASTE,
    Category.FABRIC: _FABRIC,
    Category.GLASS: _GLASS,
    Category.PAPER: _PAPER,
}


def questions_for(category: Category | str) -> list[Question]:
    """Return the ordered follow-up questions for a category."""
    return list(_QUESTION_SETS.get(coerce_category(category), _DEFAULT))
