"""
Combining ingredient lines into shopping-list items.

Lines with the same name (case-insensitive) collapse into one item:
- same unit (or both without unit): quantities are added
- one side without unit: the other unit is adopted and quantities are added
- different units: both amounts are kept side by side ("2 tbsp + 1 cup")

Quantities are free text. Only plain numbers ("2", "1.5") are added
arithmetically; anything else ("1/2", "1 1/2") is joined with " + ".
"""

import math
from typing import Dict, Iterable, List, Optional

from sniper.models import ItemDraft


def combine_items(items: Iterable[ItemDraft]) -> List[ItemDraft]:
    """
    Merge drafts that share a name.

    Args:
        items: Drafts in the order they should appear

    Returns:
        New drafts, one per distinct lowercased name, in first-seen order.
        The input drafts are not modified.

    Example:
        >>> combine_items([ItemDraft(name="flour", quantity="2", unit="cups"),
        ...                ItemDraft(name="Flour", quantity="3", unit="cups")])
        [ItemDraft(name='flour', quantity='5', unit='cups')]
    """
    merged: Dict[str, ItemDraft] = {}

    for item in items:
        key = item.name.lower()
        existing = merged.get(key)
        if existing is None:
            merged[key] = ItemDraft(name=item.name, quantity=item.quantity, unit=item.unit)
        else:
            merge_into(existing, item)

    return list(merged.values())


def merge_into(existing: ItemDraft, incoming: ItemDraft) -> None:
    """
    Fold incoming into existing (in place).

    Args:
        existing: Accumulated draft, updated in place
        incoming: Draft with the same name
    """
    if _units_match(existing.unit, incoming.unit):
        existing.quantity = sum_quantities(existing.quantity, incoming.quantity)
    elif existing.unit is None or incoming.unit is None:
        existing.unit = existing.unit if existing.unit is not None else incoming.unit
        existing.quantity = sum_quantities(existing.quantity, incoming.quantity)
    else:
        left = format_amount(existing.quantity, existing.unit)
        right = format_amount(incoming.quantity, incoming.unit)
        existing.quantity = f"{left} + {right}"
        existing.unit = None


def sum_quantities(q1: Optional[str], q2: Optional[str]) -> Optional[str]:
    """
    Add two free-text quantities.

    Returns:
        The other side if one side is blank; the numeric sum for plain numbers
        (integral sums without a decimal point); otherwise "q1 + q2".

    Examples:
        >>> sum_quantities("2", "3")
        '5'
        >>> sum_quantities("1.5", "1")
        '2.5'
        >>> sum_quantities("1/2", "1")
        '1/2 + 1'
        >>> sum_quantities(None, "2")
        '2'
    """
    if q1 is None or not q1.strip():
        return q2
    if q2 is None or not q2.strip():
        return q1

    try:
        total = float(q1) + float(q2)
    except ValueError:
        return f"{q1} + {q2}"

    if math.isfinite(total) and total.is_integer():
        return str(int(total))
    return str(total)


def format_amount(quantity: Optional[str], unit: Optional[str]) -> str:
    """Join quantity and unit with a space, skipping absent parts."""
    return " ".join(part for part in (quantity, unit) if part)


def _units_match(u1: Optional[str], u2: Optional[str]) -> bool:
    if u1 is None and u2 is None:
        return True
    if u1 is None or u2 is None:
        return False
    return u1.lower() == u2.lower()
