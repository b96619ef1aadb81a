def longest_prefix_size(a: str, b: str) -> int:
    """Number of leading code points shared by `a` and `b`."""
    n = 0
    for ca, cb in zip(a, b):
        if ca != cb:
            break
        n += 1
    return n


def longest_iprefix_size(a: str, b: str) -> int:
    """Like longest_prefix_size, but compares characters case-insensitively."""
    n = 0
    for ca, cb in zip(a, b):
        if ca.lower() != cb.lower():
            break
        n += 1
    return n
