import pytest

from offer_kit.parsers.models import IDENTITY
from offer_kit.rendering.instructions import Viewport, multiply


def test_multiply_with_identity() -> None:
    m = (2.0, 0.0, 0.0, 3.0, 5.0, 7.0)

    assert multiply(IDENTITY, m) == m
    assert multiply(m, IDENTITY) == m


def test_multiply_applies_right_operand_first() -> None:
    scale = (2.0, 0.0, 0.0, 2.0, 0.0, 0.0)
    translate = (1.0, 0.0, 0.0, 1.0, 10.0, 20.0)

    # translate, then scale: the offset is scaled too
    assert multiply(scale, translate) == (2.0, 0.0, 0.0, 2.0, 20.0, 40.0)
    # scale, then translate
    assert multiply(translate, scale) == (2.0, 0.0, 0.0, 2.0, 10.0, 20.0)


def test_viewport_flips_y_axis() -> None:
    viewport = Viewport(width=612, height=792, scale=2.0)

    a, b, c, d, e, f = multiply(viewport.transform, (1, 0, 0, 1, 100, 700))

    assert (e, f) == pytest.approx((200.0, 184.0))
    assert d == -2.0


def test_viewport_pixel_size() -> None:
    assert Viewport(width=595.28, height=841.89, scale=1.5).pixel_size == (893, 1263)
    assert Viewport(width=612, height=792).pixel_size == (612, 792)
