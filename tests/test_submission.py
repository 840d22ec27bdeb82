"""
Tests for submission parsing.
"""

import pytest

from src.submission import Submission, is_accepted, parse_submissions


@pytest.fixture
def api_records():
    """Sample records in the submission API format."""
    return [
        {
            "id": 5870151,
            "epoch_second": 1560002893,
            "problem_id": "abc129_c",
            "contest_id": "abc129",
            "user_id": "tourist",
            "language": "C++14 (GCC 5.4.1)",
            "point": 300.0,
            "length": 1121,
            "result": "AC",
            "execution_time": 17,
        },
        {
            "id": 5870152,
            "epoch_second": 1560003000,
            "problem_id": "abc129_d",
            "contest_id": "abc129",
            "user_id": "tourist",
            "language": "Python3 (3.4.3)",
            "point": 0.0,
            "length": 512,
            "result": "TLE",
            "execution_time": None,
        },
    ]


class TestIsAccepted:
    """Tests for the is_accepted function."""

    def test_ac_is_accepted(self):
        assert is_accepted("AC") is True

    @pytest.mark.parametrize("result", ["WA", "TLE", "RE", "CE", "WJ", "ac", ""])
    def test_other_results_are_not_accepted(self, result):
        assert is_accepted(result) is False


class TestParseSubmissions:
    """Tests for the parse_submissions function."""

    def test_parses_all_fields(self, api_records):
        submissions = parse_submissions(api_records)

        assert submissions[0] == Submission(
            id=5870151,
            epoch_second=1560002893,
            problem_id="abc129_c",
            result="AC",
            contest_id="abc129",
            user_id="tourist",
            language="C++14 (GCC 5.4.1)",
            point=300.0,
            length=1121,
            execution_time=17,
        )

    def test_keeps_input_order(self, api_records):
        submissions = parse_submissions(list(reversed(api_records)))

        assert [s.id for s in submissions] == [5870152, 5870151]

    def test_missing_execution_time(self, api_records):
        submissions = parse_submissions(api_records)

        assert submissions[1].execution_time is None

    def test_minimal_record_uses_defaults(self):
        submissions = parse_submissions(
            [{"id": 1, "epoch_second": 100, "problem_id": "abc001_a"}]
        )

        assert submissions == [
            Submission(id=1, epoch_second=100, problem_id="abc001_a", result="")
        ]

    def test_skips_records_missing_required_fields(self, caplog):
        """Records without id, epoch_second or problem_id are skipped."""
        records = [
            {"epoch_second": 100, "problem_id": "abc001_a", "result": "AC"},
            {"id": 2, "problem_id": "abc001_a", "result": "AC"},
            {"id": 3, "epoch_second": 100, "result": "AC"},
            {"id": 4, "epoch_second": 100, "problem_id": "abc001_a", "result": "AC"},
        ]

        with caplog.at_level("WARNING"):
            submissions = parse_submissions(records)

        assert [s.id for s in submissions] == [4]
        assert "missing fields" in caplog.text

    def test_skips_records_with_invalid_values(self, caplog):
        """Records whose values do not convert are skipped."""
        records = [
            {"id": "abc", "epoch_second": 100, "problem_id": "abc001_a"},
            {"id": 2, "epoch_second": 100, "problem_id": "abc001_a", "length": "long"},
            {"id": 3, "epoch_second": "100", "problem_id": "abc001_a", "point": None},
        ]

        with caplog.at_level("WARNING"):
            submissions = parse_submissions(records)

        assert [s.id for s in submissions] == [3]
        assert submissions[0].epoch_second == 100
        assert submissions[0].point == 0.0
        assert "invalid values" in caplog.text

    def test_empty_input(self):
        assert parse_submissions([]) == []
