import pytest

from sharetriage.base.config import TriageConfig
from sharetriage.base.errors import ConfigurationError
from sharetriage.findings.models import AggregatedFinding, Finding
from sharetriage.parsers.lines import parse_lines
from sharetriage.pipeline import filter_by_rating, triage, triage_file

SECRET_LINES = [
    r"[File] {Red}<KeepNameContainsRed|R|secret|1kB|2024-01-02 00:00:00Z>(C:\a\secret.txt) local copy",
    r"[File] {Black}<KeepNameContainsBlack|RW|secret|1kB|2024-01-01 00:00:00Z>(\\SRV1\share\secret.txt) share copy",
]


def test_same_basename_across_local_and_share_paths():
    result = triage(parse_lines(SECRET_LINES), "FullName", aggregate=True)
    assert len(result) == 1
    [agg] = result
    assert isinstance(agg, AggregatedFinding)
    assert agg.rating == "Black"
    assert agg.context == "share copy"
    assert "SRV1" in agg.hostnames
    assert set(agg.full_paths) == {r"C:\a\secret.txt", r"\\SRV1\share\secret.txt"}


def test_without_aggregation_findings_are_only_sorted():
    result = triage(parse_lines(SECRET_LINES), "FullName", aggregate=False)
    assert [type(r) for r in result] == [Finding, Finding]
    assert [r.rating for r in result] == ["Black", "Red"]


def test_aggregates_are_resorted_by_secondary_key():
    findings = [
        Finding(rating="Red", full_path="\\\\B\\s\\b.txt"),
        Finding(rating="Red", full_path="\\\\A\\s\\a.txt"),
        Finding(rating="Red", full_path="\\\\C\\s\\b.txt"),
    ]
    result = triage(findings, "Hostname")
    assert [(a.file_name, a.hostnames) for a in result] == [("a.txt", ("A",)), ("b.txt", ("B", "C"))]


def test_invalid_sort_key_fails_before_processing():
    class Exploding(list):
        def __iter__(self):
            raise AssertionError("findings must not be touched")

    with pytest.raises(ConfigurationError):
        triage(Exploding(), "Nonexistent")


def test_filter_by_rating():
    findings = [Finding(rating=r) for r in ("Black", "Red", "Yellow", "Green", "Gray")]
    assert [f.rating for f in filter_by_rating(findings, "Red")] == ["Black", "Red"]
    assert len(filter_by_rating(findings, None)) == 5


def test_triage_file_end_to_end(tmp_path, line_log):
    path = tmp_path / "snaffler.txt"
    path.write_text(line_log, encoding="utf-8")
    result = triage_file(path, TriageConfig(sort_by="Rating", aggregate=False))
    assert [f.rating for f in result] == ["Black", "Red"]
    assert result[0].hostname == "SRV2"


def test_triage_file_with_rating_floor(tmp_path, line_log):
    path = tmp_path / "snaffler.log"
    path.write_text(line_log, encoding="utf-8")
    result = triage_file(path, TriageConfig(min_rating="Black"))
    assert [a.file_name for a in result] == ["id_rsa"]
