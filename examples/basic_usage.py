"""
Reveal: Basic Usage Example

Reconstructs the secrets behind the two sample test cases, then seals one
of them with AES-256-GCM and reconstructs it again from the encrypted file.
"""

import os
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from reveal import EncryptedFileSource, JsonFileSource, SourceError, solve, solve_many

HERE = Path(__file__).parent


def main():
    print("=" * 50)
    print("  Reveal: Threshold Secret Reconstruction")
    print("=" * 50)

    sources = [JsonFileSource(HERE / "testcase1.json"), JsonFileSource(HERE / "testcase2.json")]

    # Each input is reconstructed independently
    for number, outcome in enumerate(solve_many(sources), 1):
        result = outcome.result
        print(f"\nSecret from Test Case {number}: {result.secret}")
        print(f"  Threshold: {result.threshold}")
        print(f"  Points used: {[(p.x, p.y) for p in result.points]}")
        print(f"  Exact: {result.exact}")

    # Seal a document at rest and read it back
    key = os.urandom(32)
    sealed = EncryptedFileSource(HERE / "testcase1.json.enc", key)
    report = sealed.seal(sources[0].load())
    print(f"\nSealed {report['shares']} shares to {report['location']}")
    print(f"Secret from sealed copy: {solve(sealed).secret}")

    print("\nAttempting load with wrong key...")
    try:
        solve(EncryptedFileSource(sealed.path, os.urandom(32)))
        print("  ERROR: Should have failed!")
    except SourceError:
        print("  Correctly rejected, wrong key can't decrypt the shares")

    # Cleanup
    sealed.path.unlink(missing_ok=True)
    print("\nCleaned up example files.")


if __name__ == "__main__":
    main()
