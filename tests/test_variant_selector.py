import random

import pytest

from cta_payload.cta_model import CtaData
from cta_payload.variant_selector import VariantSelector


def _variants():
    return (CtaData(message="A"), CtaData(message="B"))


def test_choose_returns_one_of_the_two_variants_unchanged():
    variants = _variants()
    chosen = VariantSelector(random.Random(7)).choose(variants)

    assert chosen is variants[0] or chosen is variants[1]


def test_choice_is_roughly_even_over_many_visits():
    variants = _variants()
    selector = VariantSelector(random.Random(2024))

    picks_a = sum(1 for _ in range(1000) if selector.choose(variants) is variants[0])

    assert 450 <= picks_a <= 550


@pytest.mark.parametrize("count", [0, 1, 3])
def test_choose_requires_exactly_two_variants(count):
    with pytest.raises(ValueError):
        VariantSelector().choose([CtaData() for _ in range(count)])
