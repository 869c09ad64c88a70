"""Recommendation engine turning answers into a disposal decision."""

import math
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from urllib.parse import quote

from ecoconnect.domain.answers import (
    EwasteAnswers,
    FabricAnswers,
    GeneralAnswers,
    GlassAnswers,
    MetalAnswers,
    PaperAnswers,
    PlasticAnswers,
)
from ecoconnect.domain.categories import Category, coerce_category
from ecoconnect.domain.items import Recommendation

DEFAULT_MARKETPLACE_URL_TEMPLATE = "https://www.olx.in/items/q-{query}"

_EWASTE_BASE_PRICES: tuple[tuple[tuple[str, ...], int], ...] = (
    (("laptop",), 15000),
    (("phone", "mobile"), 8000),
    (("tablet",), 10000),
    (("computer", "desktop"), 12000),
    (("monitor",), 3000),
)
_EWASTE_DEFAULT_PRICE = 2000
_EWASTE_AGE_FACTORS = {
    "Less than 1 year": 0.7,
    "1-3 years": 0.5,
    "3-5 years": 0.3,
}
_EWASTE_DEFAULT_AGE_FACTOR = 0.15
_EWASTE_FUNCTIONALITY_FACTORS = {
    "Partially working": 0.5,
    "Not working": 0.2,
}

_METAL_WEIGHT_KG = {
    "Very light (<1kg)": 0.5,
    "Light (1-5kg)": 3,
    "Medium (5-20kg)": 12,
    "Heavy (>20kg)": 30,
}
_METAL_DEFAULT_WEIGHT_KG = 5
_METAL_PRICE_PER_KG = 50
_SCRAP_PRICE_PER_KG = 40
_METAL_CONDITION_MULTIPLIERS = {"Excellent": 2, "Good": 1.5}

_PAPER_QUANTITY_KG = {
    "Small amount": 1,
    "Medium (bag full)": 5,
    "Large (multiple bags)": 20,
    "Very large": 50,
}
_PAPER_DEFAULT_KG = 1
_PAPER_PRICE_PER_KG = 10

_FABRIC_LIKE_NEW_VALUE = 100

_NON_QUERY_CHARS = re.compile(r"[^a-z0-9\s]")


@dataclass
class RecommendationEngine:
    """Pure decision tables keyed by waste category."""

    marketplace_url_template: str = DEFAULT_MARKETPLACE_URL_TEMPLATE

    def __post_init__(self) -> None:
        self._handlers: dict[
            Category, Callable[[str, Mapping[str, object]], Recommendation]
        ] = {
            Category.EWASTE: self._ewaste,
            Category.PLASTIC: self._plastic,
            Category.METAL: self._metal,
            Category.FABRIC: self._fabric,
            Category.GLASS: self._glass,
            Category.PAPER: self._paper,
            Category.ORGANIC: self._general,
            Category.HAZARDOUS: self._general,
            Category.OTHER: self._general,
        }

    def recommend(
        self,
        category: Category | str,
        item_name: str,
        answers: Mapping[str, object],
        meta: Mapping[str, object] | None = None,
    ) -> Recommendation:
        """Return the recommendation for an item given the user's answers.

        ``meta`` carries the classifier's material, description and condition
        estimate; the current tables decide on answers alone.
        """
        handler = self._handlers[coerce_category(category)]
        return handler(item_name or "", answers)

    def marketplace_url(self, item_name: str) -> str:
        """Build a marketplace search link for an item name."""
        cleaned = _NON_QUERY_CHARS.sub(" ", item_name.lower()).strip()
        return self.marketplace_url_template.format(query=quote(cleaned, safe=""))

    def _ewaste(self, item_name: str, raw: Mapping[str, object]) -> Recommendation:
        answers = EwasteAnswers.from_mapping(raw)
        functional = answers.functionality == "Yes, fully functional"
        if functional and answers.age == "Less than 1 year":
            value = estimate_ewaste_value(item_name, answers.functionality, answers.age)
            return Recommendation(
                action="Sell",
                reasoning=(
                    "Your device is functional and relatively new. "
                    "You can sell it online to get good value."
                ),
                estimated_value=value,
                marketplace_search_url=self._link_if_valued(item_name, value),
                tips=[
                    "Take clear photos from multiple angles",
                    "Include original box and accessories if available",
                    "Mention warranty status",
                ],
            )
        if functional or answers.functionality == "Partially working":
            value = estimate_ewaste_value(item_name, answers.functionality, answers.age)
            return Recommendation(
                action="Sell or Donate",
                reasoning=(
                    "Your device still works. Consider selling at a lower price "
                    "or donating to schools/NGOs."
                ),
                estimated_value=value,
                marketplace_search_url=self._link_if_valued(item_name, value),
                tips=[
                    "Check if local NGOs accept working electronics",
                    "Schools often need computers for students",
                ],
            )
        tips = [
            "Never throw electronics in regular trash",
            "Remove batteries before recycling",
        ]
        if answers.data == "Yes, needs wiping":
            tips.append("IMPORTANT: Wipe all personal data before recycling")
        return Recommendation(
            action="E-waste Recycling",
            reasoning=(
                "Non-functional electronics should be recycled properly to recover "
                "valuable materials and prevent environmental harm."
            ),
            estimated_value=None,
            marketplace_search_url=None,
            tips=tips,
        )

    def _plastic(self, item_name: str, raw: Mapping[str, object]) -> Recommendation:
        answers = PlasticAnswers.from_mapping(raw)
        if answers.condition == "New/Unused" and "bottle" in item_name.lower():
            action = "Reuse or Donate"
            reasoning = (
                "Unused plastic items can be reused or donated instead of recycling."
            )
            tips = [
                "Consider using as storage containers",
                "Donate to community centers or schools",
            ]
        elif answers.cleanliness in {"Yes, completely clean", "Needs minor cleaning"}:
            action = "Recycle"
            reasoning = (
                "Clean plastic can be recycled effectively. "
                "This helps reduce plastic pollution."
            )
            tips = [
                "Rinse containers before recycling",
                "Remove caps and labels if possible",
                "Check the recycling symbol (1-7) on the item",
            ]
        else:
            action = "Dispose"
            reasoning = (
                "Heavily contaminated plastic cannot be recycled "
                "and should be disposed properly."
            )
            tips = [
                "Try to clean if possible before disposal",
                "Use designated waste bins",
            ]
        return Recommendation(
            action=action,
            reasoning=reasoning,
            estimated_value=None,
            marketplace_search_url=None,
            tips=tips,
        )

    def _metal(self, item_name: str, raw: Mapping[str, object]) -> Recommendation:
        answers = MetalAnswers.from_mapping(raw)
        if answers.condition in _METAL_CONDITION_MULTIPLIERS:
            action = "Sell"
            reasoning = (
                "Metal items in good condition have resale value. "
                "You can sell them online or to scrap dealers."
            )
            value = estimate_metal_value(answers.weight, answers.condition)
            tips = [
                "Clean the item before selling",
                "Take photos showing the condition",
            ]
        else:
            action = "Sell as Scrap"
            reasoning = (
                "Metal can be sold to scrap dealers who will recycle it. "
                "Even damaged metal has value."
            )
            value = estimate_scrap_value(answers.weight)
            tips = [
                "Separate different types of metals for better rates",
                "Remove non-metal parts if possible",
            ]
        url = None
        if answers.condition != "Scrap only":
            url = self._link_if_valued(item_name, value)
        return Recommendation(
            action=action,
            reasoning=reasoning,
            estimated_value=value,
            marketplace_search_url=url,
            tips=tips,
        )

    def _fabric(self, item_name: str, raw: Mapping[str, object]) -> Recommendation:
        answers = FabricAnswers.from_mapping(raw)
        if answers.condition in {"Like new", "Gently used"}:
            action = "Sell or Donate"
            reasoning = (
                "Good condition clothing can be sold online "
                "or donated to those in need."
            )
            tips = [
                "Wash and iron before selling/donating",
                "Take clear photos for online selling",
                "Bundle similar items for better deals",
            ]
        elif answers.condition == "Worn but usable":
            action = "Donate"
            reasoning = (
                "Wearable clothes should be donated to NGOs "
                "serving underprivileged communities."
            )
            tips = [
                "Donate to local NGOs or homeless shelters",
                "Check if items are clean before donating",
            ]
        else:
            action = "Textile Recycling"
            reasoning = (
                "Damaged fabric can be recycled into new materials "
                "or used for industrial purposes."
            )
            tips = [
                "Cut into cleaning rags for home use",
                "Textile recyclers accept damaged clothing",
            ]
        like_new = answers.condition == "Like new"
        return Recommendation(
            action=action,
            reasoning=reasoning,
            estimated_value=_FABRIC_LIKE_NEW_VALUE if like_new else None,
            marketplace_search_url=(
                self.marketplace_url(item_name) if like_new else None
            ),
            tips=tips,
        )

    def _glass(self, item_name: str, raw: Mapping[str, object]) -> Recommendation:
        answers = GlassAnswers.from_mapping(raw)
        if answers.condition == "Intact":
            return Recommendation(
                action="Reuse or Recycle",
                reasoning="Intact glass items can be reused for storage or recycled.",
                estimated_value=None,
                marketplace_search_url=None,
                tips=[
                    "Clean and reuse for storage",
                    "Donate to craft centers",
                    "Recycle at glass collection points",
                ],
            )
        # Chipped or cracked glass is handled like broken glass.
        return Recommendation(
            action="Dispose Safely",
            reasoning=(
                "Broken glass should be wrapped and disposed safely "
                "to prevent injuries."
            ),
            estimated_value=None,
            marketplace_search_url=None,
            tips=[
                "Wrap in newspaper or cardboard",
                'Mark the package as "BROKEN GLASS"',
                "Use designated disposal bins",
            ],
        )

    def _paper(self, item_name: str, raw: Mapping[str, object]) -> Recommendation:
        answers = PaperAnswers.from_mapping(raw)
        if answers.type == "Books" and answers.condition == "Clean and dry":
            return Recommendation(
                action="Donate or Sell",
                reasoning=(
                    "Books in good condition can be donated to libraries "
                    "or sold online."
                ),
                estimated_value=None,
                marketplace_search_url=None,
                tips=[
                    "Donate to schools or libraries",
                    "Sell on online marketplaces",
                ],
            )
        if answers.quantity in {"Large (multiple bags)", "Very large"}:
            return Recommendation(
                action="Sell to Scrap Dealer",
                reasoning="Large quantities of paper can be sold to scrap dealers.",
                estimated_value=estimate_paper_value(answers.quantity),
                marketplace_search_url=None,
                tips=[
                    "Sort by type (newspaper, cardboard, white paper)",
                    "Ensure paper is dry",
                ],
            )
        return Recommendation(
            action="Recycle",
            reasoning="Paper is highly recyclable and helps save trees.",
            estimated_value=None,
            marketplace_search_url=None,
            tips=[
                "Remove staples and clips",
                "Keep paper dry before recycling",
            ],
        )

    def _general(self, item_name: str, raw: Mapping[str, object]) -> Recommendation:
        answers = GeneralAnswers.from_mapping(raw)
        if answers.condition in {"Excellent", "Good"}:
            action = "Sell or Donate"
            reasoning = (
                "Items in good condition should be reused by selling or donating."
            )
        else:
            action = "Recycle"
            reasoning = "Consider the best disposal method based on item condition."
        return Recommendation(
            action=action,
            reasoning=reasoning,
            estimated_value=None,
            marketplace_search_url=None,
            tips=["Contact local waste management for guidance"],
        )

    def _link_if_valued(self, item_name: str, value: int | None) -> str | None:
        return self.marketplace_url(item_name) if value else None


def estimate_ewaste_value(
    item_name: str, functionality: str | None, age: str | None
) -> int:
    """Estimate resale value of a device from its name, age and condition."""
    name = item_name.lower()
    value: float = _EWASTE_DEFAULT_PRICE
    for keywords, price in _EWASTE_BASE_PRICES:
        if any(keyword in name for keyword in keywords):
            value = price
            break
    value *= _EWASTE_AGE_FACTORS.get(age or "", _EWASTE_DEFAULT_AGE_FACTOR)
    value *= _EWASTE_FUNCTIONALITY_FACTORS.get(functionality or "", 1.0)
    return _round_amount(value)


def estimate_metal_value(weight: str | None, condition: str | None) -> int:
    """Estimate resale value of a metal item in usable condition."""
    weight_kg = _METAL_WEIGHT_KG.get(weight or "", _METAL_DEFAULT_WEIGHT_KG)
    multiplier = _METAL_CONDITION_MULTIPLIERS.get(condition or "", 1)
    return _round_amount(weight_kg * _METAL_PRICE_PER_KG * multiplier)


def estimate_scrap_value(weight: str | None) -> int:
    """Estimate scrap value of a metal item by weight."""
    weight_kg = _METAL_WEIGHT_KG.get(weight or "", _METAL_DEFAULT_WEIGHT_KG)
    return _round_amount(weight_kg * _SCRAP_PRICE_PER_KG)


def estimate_paper_value(quantity: str | None) -> int:
    """Estimate scrap value of a paper lot by quantity."""
    weight_kg = _PAPER_QUANTITY_KG.get(quantity or "", _PAPER_DEFAULT_KG)
    return _round_amount(weight_kg * _PAPER_PRICE_PER_KG)


def _round_amount(value: float) -> int:
    """Round a non-negative amount half-up to an integer."""
    return math.floor(value + 0.5)
