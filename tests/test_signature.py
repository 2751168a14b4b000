import unittest

from gh2tg.services.signature import SignatureVerifier
from gh2tg.utils import gh_signature, gh_verify

SECRET = "It's a Secret to Everybody"
BODY = b"Hello, World!"


class TestSignature(unittest.TestCase):
    def test_github_documented_example(self):
        # Example pair from GitHub's webhook validation docs.
        self.assertEqual(
            gh_signature(SECRET, BODY),
            "sha256=757107ea0eb2509fc211221cce984b8a37570b6d7586c22c46f4379c8b043e17",
        )

    def test_valid_signature(self):
        verifier = SignatureVerifier(SECRET)
        self.assertTrue(verifier.verify(BODY, gh_signature(SECRET, BODY)))

    def test_str_body_is_hashed_as_utf8(self):
        verifier = SignatureVerifier(SECRET)
        body = '{"zen": "Keep it logically awesome ✨"}'
        self.assertTrue(verifier.verify(body, gh_signature(SECRET, body.encode())))

    def test_wrong_signature(self):
        verifier = SignatureVerifier(SECRET)
        self.assertFalse(verifier.verify(BODY, "sha256=deadbeef"))

    def test_tampered_body(self):
        verifier = SignatureVerifier(SECRET)
        self.assertFalse(verifier.verify(BODY + b" ", gh_signature(SECRET, BODY)))

    def test_missing_or_malformed_header(self):
        verifier = SignatureVerifier(SECRET)
        digest = gh_signature(SECRET, BODY)
        self.assertFalse(verifier.verify(BODY, None))
        self.assertFalse(verifier.verify(BODY, ""))
        self.assertFalse(verifier.verify(BODY, digest.split("=", 1)[1]))
        self.assertFalse(verifier.verify(BODY, digest.replace("sha256=", "sha1=")))
        self.assertFalse(verifier.verify(BODY, digest.upper()))

    def test_empty_secret_always_fails(self):
        verifier = SignatureVerifier("")
        with self.assertLogs("gh2tg.services.signature", level="WARNING"):
            self.assertFalse(verifier.verify(BODY, gh_signature("", BODY)))

    def test_gh_verify_rejects_other_secret(self):
        self.assertFalse(gh_verify("other", BODY, gh_signature(SECRET, BODY)))

    def test_comparison_error_is_logged_and_false(self):
        verifier = SignatureVerifier(SECRET)
        # A lone surrogate cannot be encoded, so hashing the body fails.
        with self.assertLogs("gh2tg.services.signature", level="ERROR"):
            self.assertFalse(verifier.verify("\ud800", "sha256=00"))


if __name__ == "__main__":
    unittest.main()
