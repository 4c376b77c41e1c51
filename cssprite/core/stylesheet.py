"""CSS generation for a packed sprite strip."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePath
from typing import Dict, Iterable, List, Tuple

from .errors import DuplicateNameError
from .packer import Placement

_INVALID = re.compile(r"[^A-Za-z0-9_-]")
_LEADING_DIGIT = re.compile(r"^-?[0-9]")


@dataclass(frozen=True)
class StyleRule:
    selector: str
    sheet_name: str
    left: int
    width: int
    height: int


def selector_for(name: str, prefix: str = "") -> str:
    """Derive a CSS class name from an image path.

    ``icons/Home Page.png`` becomes ``Home-Page``; names that would start with
    a digit get a leading underscore so the selector stays valid.
    """

    # Windows separators are not separators for PurePath on POSIX
    stem = PurePath(str(name).replace("\\", "/")).stem
    selector = _INVALID.sub("-", prefix + stem)
    if selector in ("", "-"):
        selector = "_"
    if _LEADING_DIGIT.match(selector):
        selector = "_" + selector
    return selector


def build_rules(placements: Iterable[Placement], sheet_name: str, prefix: str = "") -> Tuple[StyleRule, ...]:
    rules: List[StyleRule] = []
    owners: Dict[str, str] = {}
    for placement in placements:
        selector = selector_for(placement.name, prefix)
        if selector in owners:
            raise DuplicateNameError(selector, owners[selector], placement.name)
        owners[selector] = placement.name
        rules.append(
            StyleRule(
                selector=selector,
                sheet_name=sheet_name,
                left=placement.left,
                width=placement.width,
                height=placement.height,
            )
        )
    return tuple(rules)


def _offset(value: int) -> str:
    return f"{-value}px" if value else "0"


def render_rule(rule: StyleRule) -> str:
    return (
        f".{rule.selector} {{\n"
        f"  background: url('{rule.sheet_name}') no-repeat {_offset(rule.left)} 0;\n"
        f"  width: {rule.width}px;\n"
        f"  height: {rule.height}px;\n"
        "}\n"
    )


def generate_stylesheet(placements: Iterable[Placement], sheet_name: str, prefix: str = "") -> str:
    """Return the stylesheet text, one rule per placement in placement order."""

    rules = build_rules(placements, sheet_name, prefix)
    return "\n".join(render_rule(rule) for rule in rules)


__all__ = ["StyleRule", "build_rules", "generate_stylesheet", "render_rule", "selector_for"]
