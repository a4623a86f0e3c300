from pathlib import Path

import pytest

from cluster_log.cli.app import build_parser, run_cli


FIXTURE = Path(__file__).resolve().parents[1] / 'fixtures' / 'sample_clusters.txt'


def _copy_fixture(tmp_path: Path) -> Path:
    log_dir = tmp_path / 'B06-W0212' / 'run3' / 'THL_380'
    log_dir.mkdir(parents=True)
    log = log_dir / 'clusters.txt'
    log.write_bytes(FIXTURE.read_bytes())
    return log


def test_build_parser_defaults() -> None:
    args = build_parser().parse_args(['clusters.txt'])
    assert args.log_path == Path('clusters.txt')
    assert args.table is False
    assert args.strict is False
    assert args.log_file is None


def test_run_cli_prints_table_row(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    log = _copy_fixture(tmp_path)
    size = log.stat().st_size

    assert run_cli([str(log), '--table']) == 0

    out = capsys.readouterr().out
    assert out == f'|-\n| B06-W0212 || {size} || 9 || 3 || THL_380\n'


def test_run_cli_appends_table_row(tmp_path: Path) -> None:
    log = _copy_fixture(tmp_path)
    table = tmp_path / 'detectors.wiki'

    assert run_cli([str(log), '--table-out', str(table)]) == 0
    assert run_cli([str(log), '--table-out', str(table)]) == 0

    assert table.read_text(encoding='utf-8').count('| B06-W0212 ||') == 2


def test_run_cli_prints_summary_without_table(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    log = _copy_fixture(tmp_path)

    assert run_cli([str(log)]) == 0

    out = capsys.readouterr().out
    assert 'clusters.txt: 3 frames' in out
    assert 'settings=THL_380' in out


def test_run_cli_returns_error_for_missing_log(tmp_path: Path) -> None:
    assert run_cli([str(tmp_path / 'missing.txt')]) == 1


def test_run_cli_returns_error_for_malformed_log(tmp_path: Path) -> None:
    log = tmp_path / 'bad.txt'
    log.write_text('[1, 2, 3]\n', encoding='ascii')
    assert run_cli([str(log), '--table']) == 1
