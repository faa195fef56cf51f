from __future__ import annotations

import pandas as pd
import pytest
from click.testing import CliRunner

from cli.main import cli
from core.config import reload_config


@pytest.fixture
def workspace(tmp_path):
    reload_config(tmp_path / "absent.yaml")

    records = tmp_path / "records.csv"
    pd.DataFrame(
        {
            "document_id": ["1", "2", "3"],
            "section_name": ["Arts", "World", "World"],
            "pub_date": ["2024-03-04T09:00:00Z", "2024-03-04T10:00:00Z", "bad"],
            "text": ["I love this wonderful day", "I hate this terrible mess", "Nothing here"],
        }
    ).to_csv(records, index=False)

    bing_like = tmp_path / "labels.csv"
    pd.DataFrame(
        {"word": ["love", "wonderful", "hate", "terrible"], "sentiment": ["positive", "positive", "negative", "negative"]}
    ).to_csv(bing_like, index=False)

    scores = tmp_path / "scores.csv"
    pd.DataFrame({"word": ["love", "hate", "terrible"], "score": [3, -3, -3]}).to_csv(scores, index=False)

    yield tmp_path, records, bing_like, scores
    reload_config(tmp_path / "absent.yaml")


def test_score_writes_bucket_table(workspace) -> None:
    tmp_path, records, labels, _ = workspace
    output = tmp_path / "out" / "buckets.csv"

    result = CliRunner().invoke(cli, ["score", str(records), "--lexicon", str(labels), "--output", str(output)])

    assert result.exit_code == 0, result.output
    assert "Sentiment by document" in result.output
    table = pd.read_csv(output, dtype={"document_id": str})
    assert table["net"].tolist() == [2, -2, 0]
    assert table["percentage"].tolist()[:2] == [100.0, -100.0]
    assert pd.isna(table["percentage"].iloc[2])


def test_score_by_category(workspace) -> None:
    tmp_path, records, labels, _ = workspace
    output = tmp_path / "by_category.csv"

    result = CliRunner().invoke(
        cli, ["score", str(records), "-l", str(labels), "--group-by", "category", "-o", str(output)]
    )

    assert result.exit_code == 0, result.output
    table = pd.read_csv(output)
    assert table["category"].tolist() == ["Arts", "World"]
    assert table["net"].tolist() == [2, -2]


def test_compare_reports_agreement(workspace) -> None:
    _, records, labels, scores = workspace

    result = CliRunner().invoke(cli, ["compare", str(records), "-l", str(labels), "-l", str(scores)])

    assert result.exit_code == 0, result.output
    assert "Lexicon agreement" in result.output
    assert "Groups compared: 2" in result.output


def test_words_and_lexicons_commands(workspace) -> None:
    _, records, labels, _ = workspace
    runner = CliRunner()

    words = runner.invoke(cli, ["words", str(records), "-l", str(labels), "--top", "2"])
    assert words.exit_code == 0, words.output
    assert "wonderful" in words.output

    listing = runner.invoke(cli, ["lexicons"])
    assert listing.exit_code == 0
    assert "bing" in listing.output and "vader" in listing.output


def test_unknown_lexicon_fails(workspace) -> None:
    _, records, _, _ = workspace

    result = CliRunner().invoke(cli, ["score", str(records), "-l", "does-not-exist"])

    assert result.exit_code != 0
    assert isinstance(result.exception, ValueError)


def test_non_positive_window_size_is_rejected(workspace) -> None:
    _, records, labels, _ = workspace

    result = CliRunner().invoke(cli, ["score", str(records), "-l", str(labels), "-g", "window", "-w", "0"])

    assert result.exit_code == 2
    assert "--window-size" in result.output


def test_unknown_timezone_fails_with_value_error(workspace) -> None:
    _, records, labels, _ = workspace

    result = CliRunner().invoke(cli, ["score", str(records), "-l", str(labels), "-g", "hour", "--tz", "Mars/Olympus"])

    assert result.exit_code != 0
    assert isinstance(result.exception, ValueError)
    assert "Unknown timezone" in str(result.exception)
