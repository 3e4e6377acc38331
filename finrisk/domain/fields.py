"""Required-field helpers behind the "abstain, don't guess" policy.

Every analyzer that needs optional statement fields goes through
:func:`require_all` so missing data is handled the same way everywhere:
``None`` means the check cannot run, it is never coerced to zero.

Usage:
    from finrisk.domain.fields import require_all

    values = require_all(statement, "operating_cf", "net_income", nonzero=("net_income",))
    if values is None:
        return abstain(...)
    cfo, ni = values
"""

from typing import Any, Iterable, Optional


def require_all(
    record: Any,
    *fields: str,
    nonzero: Iterable[str] = (),
    positive: Iterable[str] = (),
) -> Optional[tuple[float, ...]]:
    """Return the named field values, or None if any is missing.

    Args:
        record: Any object exposing the fields as attributes.
        fields: Field names, in the order the values should be returned.
        nonzero: Subset of *fields* that must also be non-zero (denominators).
        positive: Subset of *fields* that must also be strictly positive.

    Examples:
        >>> from types import SimpleNamespace
        >>> s = SimpleNamespace(cash=50.0, current_liabilities=200.0, inventory=None)
        >>> require_all(s, "cash", "current_liabilities", nonzero=("current_liabilities",))
        (50.0, 200.0)
        >>> require_all(s, "cash", "inventory") is None
        True
    """
    values = tuple(getattr(record, name, None) for name in fields)
    if any(v is None for v in values):
        return None

    by_name = dict(zip(fields, values))
    if any(by_name[name] == 0 for name in nonzero):
        return None
    if any(by_name[name] <= 0 for name in positive):
        return None
    return values
