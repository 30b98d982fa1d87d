"""CLI 命令测试"""

import json

import pytest
from typer.testing import CliRunner

from brainmux.cli import app
from brainmux.core.config import reset_settings
from brainmux.core.logging import setup_logging

runner = CliRunner()
WIDE = {"COLUMNS": "200"}


@pytest.fixture(autouse=True)
def restore_logging():
    """CLI 回调会替换日志 sink，测试结束后恢复到真实 stderr"""
    reset_settings()
    yield
    setup_logging()
    reset_settings()


@pytest.fixture
def outputs_file(tmp_path):
    path = tmp_path / "outputs.json"
    path.write_text(json.dumps([
        {"source": "A", "content": "The answer is yes", "quality": 90},
        {"source": "B", "content": "The answer is no", "quality": 0.5},
    ]), encoding="utf-8")
    return path


class TestRegistryCommand:
    """registry 命令测试"""

    def test_default_registry(self) -> None:
        result = runner.invoke(app, ["registry"], env=WIDE)
        assert result.exit_code == 0
        assert "conductorAdvisor" in result.output
        assert "knowledgeGraphAdvisor" in result.output

    def test_invalid_file(self, tmp_path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("[]", encoding="utf-8")
        result = runner.invoke(app, ["registry", "--file", str(path)], env=WIDE)
        assert result.exit_code == 1


class TestMergeCommand:
    """merge 命令测试"""

    def test_merge_json(self, outputs_file) -> None:
        result = runner.invoke(app, ["merge", str(outputs_file), "--user", "alice", "--json"], env=WIDE)
        assert result.exit_code == 0
        assert '"user_id": "alice"' in result.output
        assert '"sources": [' in result.output
        assert '"A"' in result.output

    def test_merge_text(self, outputs_file) -> None:
        result = runner.invoke(app, ["merge", str(outputs_file)], env=WIDE)
        assert result.exit_code == 0
        assert "0.70" in result.output
        assert "A, B" in result.output

    def test_merge_invalid_file(self, tmp_path) -> None:
        path = tmp_path / "outputs.json"
        path.write_text('{"source": "A"}', encoding="utf-8")
        result = runner.invoke(app, ["merge", str(path)], env=WIDE)
        assert result.exit_code != 0


class TestConsistencyCommand:
    """consistency 命令测试"""

    def test_consistency(self, outputs_file) -> None:
        result = runner.invoke(app, ["consistency", str(outputs_file)], env=WIDE)
        assert result.exit_code == 0
        assert "0.60" in result.output
        assert "0.90" in result.output

    def test_consistency_empty(self, tmp_path) -> None:
        path = tmp_path / "outputs.json"
        path.write_text("[]", encoding="utf-8")
        result = runner.invoke(app, ["consistency", str(path)], env=WIDE)
        assert result.exit_code == 0
        assert "1.00" in result.output
