"""Layout tree types and the LUMOS card template."""

from .composer import CardDesign, compose_card, truncate
from .models import (
    Container,
    GradientStop,
    LayoutNode,
    LinearGradient,
    Style,
    TextLeaf,
    iter_text_leaves,
)

__all__ = [
    "CardDesign",
    "Container",
    "GradientStop",
    "LayoutNode",
    "LinearGradient",
    "Style",
    "TextLeaf",
    "compose_card",
    "iter_text_leaves",
    "truncate",
]
