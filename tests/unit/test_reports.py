import csv
import io
from datetime import datetime, timezone

import pytest

from sharetriage.base.errors import ConfigurationError, ErrorCode, TriageError
from sharetriage.findings.aggregator import aggregate
from sharetriage.findings.models import AggregatedFinding, Finding
from sharetriage.reporting.composer import ReportComposer
from sharetriage.reporting.csv_report import AGGREGATED_COLUMNS, FINDING_COLUMNS, flatten_cell, render_csv
from sharetriage.reporting.html_report import build_summary, escape, render_html


def test_csv_quotes_everything_and_collapses_line_breaks():
    f = Finding(rating="Red", rights="RW", full_path="\\\\H\\s\\a.txt", context='He said "hi"\nline2')
    out = render_csv([f])
    lines = out.split("\r\n")
    assert lines[0] == ",".join(f'"{c}"' for c in FINDING_COLUMNS)
    assert lines[1].endswith(',"He said ""hi"" line2"')
    assert lines[1].startswith('"Red","RW","H","\\\\H\\s\\a.txt",')
    assert lines[2] == ""


def test_csv_round_trips_through_reader():
    ts = datetime(2024, 2, 28, 8, 15, tzinfo=timezone.utc)
    f = Finding(rating="Black", full_path="C:\\x\\y", creation_time=ts, context="a,b\r\n\r\nc")
    rows = list(csv.reader(io.StringIO(render_csv([f]))))
    assert rows[1] == ["Black", "", "", "C:\\x\\y", "2024-02-28 08:15:00Z", "", "a,b c"]


def test_csv_aggregated_columns_join_hosts_and_paths_on_one_line():
    agg = AggregatedFinding(
        file_name="a.txt",
        rating="Red",
        hostnames=("A", "B"),
        full_paths=("\\\\A\\s\\a.txt", "\\\\B\\s\\a.txt"),
    )
    rows = list(csv.reader(io.StringIO(render_csv([agg], aggregated=True))))
    assert rows[0] == AGGREGATED_COLUMNS
    assert rows[1][:5] == ["a.txt", "Red", "", "A B", "\\\\A\\s\\a.txt \\\\B\\s\\a.txt"]


def test_csv_header_follows_record_type_not_flag():
    findings = [
        Finding(rating="Red", full_path="\\\\A\\s\\a.txt"),
        Finding(rating="Red", full_path="\\\\B\\s\\a.txt"),
    ]
    rows = list(csv.reader(io.StringIO(render_csv(aggregate(findings)))))
    assert rows[0] == AGGREGATED_COLUMNS
    assert len(rows[0]) == len(rows[1])

    rows = list(csv.reader(io.StringIO(render_csv(findings, aggregated=True))))
    assert rows[0] == FINDING_COLUMNS
    assert all(len(row) == len(FINDING_COLUMNS) for row in rows)


def test_csv_rejects_mixed_record_types():
    f = Finding(rating="Red", full_path="\\\\A\\s\\a.txt")
    with pytest.raises(TypeError):
        render_csv([f] + aggregate([f]))


def test_flatten_cell():
    assert flatten_cell("a\r\nb\nc\rd") == "a b c d"
    assert flatten_cell("") == ""


def test_html_escapes_free_text():
    assert escape("<script>&</script>") == "&lt;script&gt;&amp;&lt;/script&gt;"
    f = Finding(rating="Red", full_path="\\\\H\\s\\<a>.txt", context="if (a < b && c > d)")
    page = render_html([f])
    assert "if (a &lt; b &amp;&amp; c &gt; d)" in page
    assert "\\\\H\\s\\&lt;a&gt;.txt" in page
    assert "<a>.txt" not in page


@pytest.mark.parametrize(
    "rating, colour",
    [("Red", "#ffcccc"), ("Yellow", "#ffffcc"), ("Green", "#ccffcc"), ("Black", "#000000"), ("Gray", "#ffffff")],
)
def test_html_row_background_follows_rating(rating, colour):
    page = render_html([Finding(rating=rating, context="ctx")])
    assert f'<tr style="background-color: {colour}' in page


def test_html_black_rows_use_light_text_and_inline_context():
    page = render_html([Finding(rating="Black", context="-----BEGIN RSA")])
    assert '<tr style="background-color: #000000; color: #ffffff">' in page
    assert '<span style="white-space: pre-wrap; color: #ffffff">-----BEGIN RSA</span>' in page
    assert "<pre>-----BEGIN RSA</pre>" not in page


def test_html_other_rows_use_preformatted_context():
    page = render_html([Finding(rating="Red", context="secret")])
    assert "<pre>secret</pre>" in page


def test_html_multi_value_cells_use_line_breaks():
    agg = AggregatedFinding(file_name="a", rating="Red", hostnames=("A", "B"))
    assert "<td>A<br>B</td>" in render_html([agg])


def test_summary_counts_per_rating():
    records = [Finding(rating="Red"), Finding(rating="Red"), Finding(rating="Gray"), Finding(rating="Black")]
    assert build_summary(records) == {"Black": 1, "Red": 2, "Yellow": 0, "Green": 0, "Default": 1}


def test_composer_builds_and_saves_artifacts(tmp_path):
    composer = ReportComposer(tmp_path / "scan.log")
    records = [Finding(rating="Red", full_path="\\\\H\\s\\a.txt")]
    artifacts = composer.compose(records, ["html", "csv"], aggregated=False)
    assert [a.format for a in artifacts] == ["html", "csv"]
    assert all(a.record_count == 1 and not a.aggregated for a in artifacts)

    paths = [composer.save(a, tmp_path / "out") for a in artifacts]
    assert [p.name for p in paths] == ["scan_triage.html", "scan_triage.csv"]
    assert paths[1].read_bytes().count(b"\r\n") == 2


def test_composer_names_aggregated_reports(tmp_path):
    composer = ReportComposer("scan.json")
    [artifact] = composer.compose([], ["csv"], aggregated=True)
    assert composer.output_path(artifact, tmp_path).name == "scan_triage_aggregated.csv"


def test_composer_rejects_unknown_format():
    with pytest.raises(ConfigurationError):
        ReportComposer("scan.log").compose([], ["pdf"])


def test_composer_save_failure_is_reported(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    composer = ReportComposer("scan.log")
    [artifact] = composer.compose([], ["csv"])
    with pytest.raises(TriageError) as exc_info:
        composer.save(artifact, blocker)
    assert exc_info.value.code is ErrorCode.REPORT_WRITE_FAILED
