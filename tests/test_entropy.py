"""Tests for the entropy (filecontent) detector."""

import string

import pytest

from leakgate.detectors.entropy import (
    BASE64_THRESHOLD,
    HEX_THRESHOLD,
    EntropyDetector,
    classify,
    extract_candidates,
    find_card_numbers,
    find_high_entropy,
    luhn_valid,
    shannon_entropy,
    windows,
)
from leakgate.detectors.models import BinaryContentError
from leakgate.git.models import Addition

HIGH_BASE64 = "FEBLx1zS214owpjy7qsBeixbURkuhQAwrK5UwLGTwt4"
HIGH_HEX = "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b"


class TestShannonEntropy:
    def test_empty_string(self):
        assert shannon_entropy("") == 0.0

    def test_single_char_repeated(self):
        # "aaaa" → entropy 0 (only one symbol)
        assert shannon_entropy("aaaa") == 0.0

    def test_two_equal_chars(self):
        # "ab" → entropy 1.0
        assert abs(shannon_entropy("ab") - 1.0) < 0.01

    def test_uniform_distribution(self):
        s = string.ascii_lowercase[:16]  # 16 unique chars
        assert shannon_entropy(s) > 3.9  # log2(16) = 4.0

    def test_english_word(self):
        assert shannon_entropy("password") < 3.5

    def test_known_entropy(self):
        # "abcd" has 4 symbols, each p=0.25, H = -4*(0.25*log2(0.25)) = 2.0
        assert abs(shannon_entropy("abcd") - 2.0) < 0.01


class TestCandidateExtraction:
    def test_quoted_value(self):
        assert extract_candidates(f'key = "{HIGH_BASE64}"') == [HIGH_BASE64]

    def test_short_runs_ignored(self):
        assert extract_candidates("short = 'abc123'") == []

    def test_split_on_delimiters(self):
        candidates = extract_candidates(f"h1:{HIGH_BASE64}=")
        assert candidates == [HIGH_BASE64]

    def test_classify_hex(self):
        assert classify(HIGH_HEX) == ("hex", HEX_THRESHOLD)

    def test_classify_base64(self):
        assert classify(HIGH_BASE64) == ("base64", BASE64_THRESHOLD)


class TestWindows:
    def test_short_run_is_one_window(self):
        assert list(windows("a" * 30)) == ["a" * 30]

    def test_long_run_windows_cover_the_tail(self):
        run = "".join(chr(ord("a") + i % 26) for i in range(100))
        parts = list(windows(run))
        assert all(len(p) == 64 for p in parts)
        assert parts[0] == run[:64]
        assert parts[-1] == run[-64:]


class TestFindHighEntropy:
    def test_base64_flagged(self):
        hits = find_high_entropy(f'token = "{HIGH_BASE64}"')
        assert [(run, enc) for run, enc, _ in hits] == [(HIGH_BASE64, "base64")]

    def test_hex_flagged(self):
        hits = find_high_entropy(f"digest: {HIGH_HEX}")
        assert [(run, enc) for run, enc, _ in hits] == [(HIGH_HEX, "hex")]

    def test_low_entropy_hex_not_flagged(self):
        assert find_high_entropy("aaaaaaaaaabbbbbbbbbbaaaa") == []

    def test_plain_prose_not_flagged(self):
        assert find_high_entropy("the quick brown fox jumps over the lazy dog") == []

    def test_non_hex_run_needs_23_characters(self):
        # all-distinct characters give the highest entropy a run can have
        assert find_high_entropy(string.ascii_uppercase[:22]) == []
        hits = find_high_entropy(string.ascii_uppercase[:23])
        assert [(run, enc) for run, enc, _ in hits] == [(string.ascii_uppercase[:23], "base64")]

    def test_pure_digits_skipped(self):
        assert find_high_entropy("id = 12345678901234567890123") == []

    def test_secret_inside_long_run_found_by_window(self):
        dense = string.ascii_letters + string.digits + "+/"
        run = "a" * 128 + dense
        assert shannon_entropy(run) < BASE64_THRESHOLD
        hits = find_high_entropy(run)
        assert [h[0] for h in hits] == [run]


class TestCardNumbers:
    @pytest.mark.parametrize("number", ["4111111111111111", "5500 0000 0000 0004", "3782-822463-10005"])
    def test_luhn_valid(self, number):
        assert luhn_valid(number)

    def test_luhn_invalid(self):
        assert not luhn_valid("4111111111111112")

    def test_found_in_text(self):
        assert find_card_numbers("card=4111111111111111;") == ["4111111111111111"]

    def test_invalid_not_found(self):
        assert find_card_numbers("order 4111111111111112") == []


class TestEntropyDetector:
    def test_finding_fields(self):
        addition = Addition("config.yml", f"api: {HIGH_BASE64}\n".encode())
        findings = EntropyDetector().detect(addition)
        assert len(findings) == 1
        f = findings[0]
        assert f.detector_name == "filecontent"
        assert f.rule_id == "HIGH_ENTROPY_BASE64"
        assert f.severity == "high"
        assert "added line 1" in f.message
        assert HIGH_BASE64 not in f.message  # redacted

    def test_hex_severity(self):
        findings = EntropyDetector().detect(Addition("a.txt", f"{HIGH_HEX}\n".encode()))
        assert [f.severity for f in findings] == ["medium"]

    def test_card_number(self):
        findings = EntropyDetector().detect(Addition("pay.txt", b"card 4111111111111111\n"))
        assert [f.rule_id for f in findings] == ["CREDIT_CARD_NUMBER"]

    def test_empty_content(self):
        assert EntropyDetector().detect(Addition("empty.txt", b"")) == []

    def test_binary_raises(self):
        with pytest.raises(BinaryContentError):
            EntropyDetector().detect(Addition("blob.bin", b"\x00\x01" + HIGH_BASE64.encode()))
