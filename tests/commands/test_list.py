# tests/commands/test_list.py
"""Tests for the list command."""

import os

from pocketscholar.commands import list_cmd


class TestListCommand:
    """Tests for list_cmd.list_documents()."""

    def test_list_no_database(self, temp_dir) -> None:
        result = list_cmd.list_documents(data_dir=os.path.join(temp_dir, "missing"))

        assert result.success is True
        assert result.documents == []

    def test_list_documents(self, data_dir) -> None:
        result = list_cmd.list_documents(data_dir=data_dir)

        by_id = {doc.document_id: doc for doc in result.documents}
        assert result.success is True
        assert set(by_id) == {"notes", "paper"}
        assert by_id["notes"].chunk_count == 3
        assert by_id["notes"].page_count == 2
        assert by_id["paper"].chunk_count == 1
        assert by_id["paper"].page_count == 1

    def test_data_dir_from_env(self, data_dir, monkeypatch) -> None:
        monkeypatch.setenv("POCKETSCHOLAR_DATA_DIR", data_dir)

        result = list_cmd.list_documents()

        assert len(result.documents) == 2

    def test_data_dir_from_yaml(self, data_dir, temp_dir) -> None:
        config_path = os.path.join(temp_dir, "pocketscholar.yaml")
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(f"data_dir: {data_dir}\n")

        result = list_cmd.list_documents(config_path=config_path)

        assert len(result.documents) == 2
