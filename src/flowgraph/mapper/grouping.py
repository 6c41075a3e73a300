from typing import Callable, Dict, Hashable, Iterable, List, TypeVar

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def group_by(items: Iterable[T], key: Callable[[T], K]) -> Dict[K, List[T]]:
    """Group items by key. Groups keep first-seen key order and input order within a group."""
    groups: Dict[K, List[T]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return groups


def unordered_pair_key(first: str, second: str) -> str:
    return "-".join(sorted((first, second)))


def truncating_div(numerator: int, denominator: int) -> int:
    # Python's // floors; the share must truncate toward zero
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient
