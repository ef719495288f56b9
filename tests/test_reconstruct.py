"""
Tests for the reconstruction pipeline and batch runner.
"""

import os
import sys
import tempfile
import warnings
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from reveal.config import RevealConfig
from reveal.document import ShareDocument
from reveal.errors import (
    DuplicateIndex,
    InexactInterpolation,
    InsufficientPoints,
    InvalidDigitString,
    InvalidThreshold,
    SourceError,
)
from reveal.reconstruct import reconstruct, solve, solve_many
from reveal.points import encode_digits
from reveal.sources import EncryptedFileSource, JsonFileSource

EXAMPLES = Path(__file__).parent.parent / "examples"


def _document(k, shares, n=None):
    entries = {"keys": {"k": k} if n is None else {"n": n, "k": k}}
    for x, (base, value) in shares.items():
        entries[str(x)] = {"base": base, "value": value}
    return ShareDocument.from_mapping(entries)


def test_example_test_cases():
    """Both sample inputs reconstruct their known secrets."""
    print("Testing example test cases...", end=" ")
    first = solve(JsonFileSource(EXAMPLES / "testcase1.json"))
    assert first.secret == 3
    assert first.exact
    assert [p.x for p in first.points] == [1, 2, 3]

    second = solve(JsonFileSource(EXAMPLES / "testcase2.json"))
    assert second.secret == 0xDEADBEEF
    assert [p.x for p in second.points] == [1, 2, 3, 4]
    print("PASS")


def test_mixed_base_scenario():
    print("Testing mixed-base scenario...", end=" ")
    document = _document(2, {1: ("10", "4"), 2: ("2", "111"), 3: ("16", "c")}, n=3)
    result = reconstruct(document)
    assert result.secret == 1
    assert result.threshold == 2
    assert result.verified is None
    print("PASS")


def test_verify_flags_inconsistent_shares():
    """Share 3 is off the line through shares 1 and 2."""
    print("Testing verification of inconsistent shares...", end=" ")
    document = _document(2, {1: ("10", "4"), 2: ("2", "111"), 3: ("16", "c")}, n=3)
    result = reconstruct(document, RevealConfig(verify=True))
    assert result.secret == 1
    assert result.verified is False

    consistent = _document(2, {1: ("10", "4"), 2: ("2", "111"), 3: ("16", "a")}, n=3)
    assert reconstruct(consistent, RevealConfig(verify=True)).verified is True
    print("PASS")


def test_inexact_document():
    print("Testing inexact document...", end=" ")
    document = _document(2, {1: ("10", "1"), 3: ("10", "2")})
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        result = reconstruct(document)
    assert not result.exact
    assert result.secret == 0
    assert any(issubclass(w.category, InexactInterpolation) for w in caught)

    try:
        reconstruct(document, RevealConfig(strict=True))
        raise AssertionError("should have raised InexactInterpolation")
    except InexactInterpolation:
        pass
    print("PASS")


def test_declared_count_mismatch():
    """n differing from the record count warns, or fails with strict_count."""
    print("Testing declared count mismatch...", end=" ")
    document = _document(2, {1: ("10", "4"), 2: ("10", "7")}, n=5)
    assert reconstruct(document).secret == 1
    try:
        reconstruct(document, RevealConfig(strict_count=True))
        raise AssertionError("should have raised InvalidThreshold")
    except InvalidThreshold as e:
        assert "n = 5" in str(e)
    print("PASS")


def test_all_or_nothing():
    """One bad record aborts the reconstruction even if it would not be used."""
    print("Testing all-or-nothing decoding...", end=" ")
    document = _document(2, {1: ("10", "4"), 2: ("10", "7"), 9: ("2", "102")})
    try:
        reconstruct(document)
        raise AssertionError("should have raised InvalidDigitString")
    except InvalidDigitString as e:
        assert "Share 9" in str(e)

    document = _document(2, {1: ("10", "4"), "01": ("10", "4")})
    try:
        reconstruct(document)
        raise AssertionError("should have raised DuplicateIndex")
    except DuplicateIndex:
        pass
    print("PASS")


def test_too_few_shares():
    print("Testing too few shares...", end=" ")
    document = _document(3, {1: ("10", "4"), 2: ("10", "7")})
    try:
        reconstruct(document)
        raise AssertionError("should have raised InsufficientPoints")
    except InsufficientPoints:
        pass
    print("PASS")


def test_solve_many_isolates_failures():
    """A failing input is recorded; the others still reconstruct."""
    print("Testing batch failure isolation...", end=" ")
    with tempfile.TemporaryDirectory() as tmpdir:
        bad = Path(tmpdir) / "bad.json"
        bad.write_text('{"keys": {"n": 2, "k": 2}, "1": {"base": "99", "value": "4"}}')
        sources = [
            JsonFileSource(EXAMPLES / "testcase1.json"),
            JsonFileSource(bad),
            JsonFileSource(Path(tmpdir) / "missing.json"),
            JsonFileSource(EXAMPLES / "testcase2.json"),
        ]

        for jobs in (1, 4):
            outcomes = solve_many(sources, RevealConfig(jobs=jobs))
            assert [o.ok for o in outcomes] == [True, False, False, True]
            assert outcomes[0].result.secret == 3
            assert outcomes[3].result.secret == 0xDEADBEEF
            assert outcomes[1].source.endswith("bad.json")
            assert isinstance(outcomes[2].error, SourceError)
            assert outcomes[1].result is None
    print("PASS")


def test_solve_many_isolates_unreadable_files():
    """Undecodable or truncated files fail alone; the good input still returns."""
    print("Testing batch isolation of unreadable files...", end=" ")
    with tempfile.TemporaryDirectory() as tmpdir:
        binary = Path(tmpdir) / "binary.json"
        binary.write_bytes(b"\xff\xfe{}")
        empty = Path(tmpdir) / "empty.enc"
        empty.write_bytes(b"")
        sources = [
            JsonFileSource(binary),
            EncryptedFileSource(empty, os.urandom(32)),
            JsonFileSource(EXAMPLES / "testcase1.json"),
        ]

        outcomes = solve_many(sources)
        assert [o.ok for o in outcomes] == [False, False, True]
        assert isinstance(outcomes[0].error, SourceError)
        assert isinstance(outcomes[1].error, SourceError)
        assert outcomes[2].result.secret == 3
    print("PASS")


def test_long_share_values():
    """A share thousands of digits long reconstructs exactly."""
    print("Testing shares beyond the str-digits limit...", end=" ")
    secret = 10 ** 5000 + 7
    # y = secret + 2x
    document = _document(2, {
        1: ("10", encode_digits(secret + 2, 10)),
        2: ("16", encode_digits(secret + 4, 16)),
        3: ("36", encode_digits(secret + 6, 36)),
    }, n=3)
    result = reconstruct(document, RevealConfig(verify=True))
    assert result.secret == secret
    assert result.exact and result.verified
    print("PASS")


def test_config_from_env():
    print("Testing config from environment...", end=" ")
    saved = dict(os.environ)
    try:
        os.environ.update({
            "REVEAL_STRICT": "true",
            "REVEAL_VERIFY": "1",
            "REVEAL_VERIFY_LIMIT": "10",
            "REVEAL_JOBS": "3",
            "REVEAL_LOG_LEVEL": "debug",
        })
        os.environ.pop("REVEAL_STRICT_COUNT", None)
        config = RevealConfig.from_env()
        assert config.strict and config.verify
        assert not config.strict_count
        assert config.verify_limit == 10
        assert config.jobs == 3
        assert config.log_level == "DEBUG"

        os.environ["REVEAL_JOBS"] = "many"
        try:
            RevealConfig.from_env()
            raise AssertionError("should have rejected REVEAL_JOBS")
        except ValueError as e:
            assert "REVEAL_JOBS" in str(e)
    finally:
        os.environ.clear()
        os.environ.update(saved)
    print("PASS")


def main():
    print("=" * 50)
    print("  Reconstruction Pipeline Tests")
    print("=" * 50)
    print()

    tests = [
        test_example_test_cases,
        test_mixed_base_scenario,
        test_verify_flags_inconsistent_shares,
        test_inexact_document,
        test_declared_count_mismatch,
        test_all_or_nothing,
        test_too_few_shares,
        test_solve_many_isolates_failures,
        test_solve_many_isolates_unreadable_files,
        test_long_share_values,
        test_config_from_env,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"FAIL: {e}")
            import traceback
            traceback.print_exc()
            failed += 1

    print()
    print(f"Results: {passed} passed, {failed} failed")
    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
