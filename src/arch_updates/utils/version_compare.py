"""pkgver/pkgrel comparison utilities.

Ordering follows pacman's `vercmp`: versions are split into runs of digits
and runs of letters, digit runs compare numerically, letter runs compare
lexically, and a digit run always beats a letter run.
"""

from __future__ import annotations


def _is_alnum(c: str) -> bool:
    return c.isascii() and c.isalnum()


def _is_digit(c: str) -> bool:
    return c.isascii() and c.isdigit()


def _is_alpha(c: str) -> bool:
    return c.isascii() and c.isalpha()


def rpmvercmp(a: str, b: str) -> int:
    """Compare two version strings segment by segment.

    Returns -1, 0 or 1 like `vercmp`. Separator characters only matter by
    count, so `1.0_1` and `1.0.1` compare equal.
    """
    if a == b:
        return 0

    i = j = 0
    end_a = end_b = 0
    len_a, len_b = len(a), len(b)
    while i < len_a and j < len_b:
        while i < len_a and not _is_alnum(a[i]):
            i += 1
        while j < len_b and not _is_alnum(b[j]):
            j += 1
        if i >= len_a or j >= len_b:
            break

        # More separators wins
        if i - end_a != j - end_b:
            return -1 if i - end_a < j - end_b else 1

        end_a, end_b = i, j
        is_num = _is_digit(a[i])
        same_kind = _is_digit if is_num else _is_alpha
        while end_a < len_a and same_kind(a[end_a]):
            end_a += 1
        while end_b < len_b and same_kind(b[end_b]):
            end_b += 1

        seg_a, seg_b = a[i:end_a], b[j:end_b]
        if not seg_b:
            # Numeric segments are always newer than alpha ones.
            return 1 if is_num else -1
        if is_num:
            seg_a, seg_b = seg_a.lstrip("0"), seg_b.lstrip("0")
            if len(seg_a) != len(seg_b):
                return 1 if len(seg_a) > len(seg_b) else -1
        if seg_a != seg_b:
            return 1 if seg_a > seg_b else -1
        i, j = end_a, end_b

    if i >= len_a and j >= len_b:
        return 0
    # A leftover letter run never beats an empty string: 1.0rc1 < 1.0 < 1.0.1
    if (i >= len_a and not _is_alpha(b[j])) or (i < len_a and _is_alpha(a[i])):
        return -1
    return 1


def split_epoch(pkgver: str) -> tuple[str, str]:
    """Split `epoch:version`. A missing epoch is "0"."""
    epoch, sep, rest = pkgver.partition(":")
    if sep and epoch.isdigit():
        return epoch, rest
    return "0", pkgver


def is_orderable(pkgver: str) -> bool:
    """True if the version starts with a number, optionally after a `v`.

    Bare commit hashes and other free text can't be meaningfully ordered.
    """
    _, version = split_epoch(pkgver)
    if version[:1] in ("v", "V"):
        version = version[1:]
    return _is_digit(version[:1])


def vercmp(current: str, candidate: str) -> int:
    """Epoch-aware comparison of two pkgvers."""
    epoch_cur, ver_cur = split_epoch(current)
    epoch_new, ver_new = split_epoch(candidate)
    return rpmvercmp(epoch_cur, epoch_new) or rpmvercmp(ver_cur, ver_new)


def update_due(pkgver_cur: str, pkgrel_cur: str, pkgver_new: str, pkgrel_new: str) -> bool:
    """Return True if pkgver_new-pkgrel_new is newer than the current pair.

    If either pkgver can't be ordered (e.g. a VCS package using a bare commit
    hash) the update is never due. Devel packages are covered separately.
    """
    if not (is_orderable(pkgver_cur) and is_orderable(pkgver_new)):
        return False
    cmp = vercmp(pkgver_cur, pkgver_new)
    if cmp != 0:
        return cmp < 0
    return rpmvercmp(pkgrel_cur, pkgrel_new) < 0
