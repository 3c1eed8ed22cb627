"""
Strict Parity Helper

Byte-for-byte comparison with a readable diff on mismatch.
"""


def assert_hex_equal(actual: bytes, expected_hex: str, ctx: str) -> None:
    """
    Assert that actual bytes match an expected hex string.

    Args:
        actual: Actual bytes to compare
        expected_hex: Expected hex string (spaces allowed)
        ctx: Context string for error messages

    Raises:
        AssertionError: If bytes don't match, with the first differing offset
    """
    expected_hex = expected_hex.replace(" ", "").lower()
    actual_hex = actual.hex()
    if actual_hex == expected_hex:
        return

    expected = bytes.fromhex(expected_hex)
    offset = next(
        (i for i, (a, b) in enumerate(zip(actual, expected)) if a != b),
        min(len(actual), len(expected)),
    )
    raise AssertionError(
        f"Binary mismatch in {ctx}: first difference at byte {offset} "
        f"(expected {len(expected)} bytes, got {len(actual)})\n"
        f"  expected: {expected_hex}\n"
        f"  actual:   {actual_hex}"
    )
