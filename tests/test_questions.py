"""Tests for the follow-up question bank."""

import pytest

from ecoconnect.domain.categories import Category
from ecoconnect.domain.questions import QUESTIONS_PER_ITEM, questions_for


@pytest.mark.parametrize("category", list(Category))
def test_every_category_has_four_questions_ending_with_intent(
    category: Category,
) -> None:
    questions = questions_for(category)

    assert len(questions) == QUESTIONS_PER_ITEM
    assert questions[-1].id == "intent"
    for question in questions:
        assert 3 <= len(question.options) <= 5


def test_categories_without_a_dedicated_set_share_the_default() -> None:
    default = questions_for(Category.OTHER)

    assert questions_for(Category.ORGANIC) == default
    assert questions_for(Category.HAZARDOUS) == default
    assert questions_for("unknown") == default
    assert [question.id for question in default] == [
        "condition",
        "age",
        "usability",
        "intent",
    ]


def test_ewaste_questions_cover_functionality_and_data() -> None:
    ids = [question.id for question in questions_for(Category.EWASTE)]

    assert ids == ["functionality", "age", "data", "intent"]
