"""Tests for batch-file parsing."""

import json
from pathlib import Path

import pytest

from art_split_merger.batch.jobs import (
    BatchJob,
    jobs_from_groups,
    load_batch_file,
    parse_batch_item,
)
from art_split_merger.errors import InputNotFound, InvalidBatchSchema
from art_split_merger.layout import CropRect, Transform


class TestParseBatchItem:
    def test_left_right_pair(self) -> None:
        job = parse_batch_item(
            {"left": "a.png", "right": "b.png", "out": "ab.jpg"}, 0,
        )
        assert job == BatchJob(
            images=(Path("a.png"), Path("b.png")), out=Path("ab.jpg"),
        )
        assert job.label == "a.png + b.png"

    def test_images_list_and_default_out(self) -> None:
        job = parse_batch_item({"images": ["x/c.png", "d.png", "e.png"]}, 3)
        assert len(job.images) == 3
        assert job.out == Path("c_merged.png")

    def test_transforms_converted(self) -> None:
        job = parse_batch_item(
            {
                "left": "a.png",
                "right": "b.png",
                "transforms": [
                    {"rotate": -90, "flip_h": True, "brightness": 10},
                    None,
                    {"crop": {"x": 0.1, "y": 0.1, "w": 0.5, "h": 0.5}},
                ],
            },
            0,
        )
        assert job.transforms == (
            Transform(rotate=270, flip_h=True, brightness=10),
            None,
            Transform(crop=CropRect(0.1, 0.1, 0.5, 0.5)),
        )

    @pytest.mark.parametrize(
        "raw",
        [
            {"left": "a.png"},
            {"out": "x.png"},
            {"images": []},
            "a.png",
            {"left": "a.png", "right": "b.png",
             "transforms": [{"rotate": 45}]},
            {"left": "a.png", "right": "b.png",
             "transforms": [{"contrast": 300}]},
        ],
    )
    def test_invalid_items(self, raw: object) -> None:
        with pytest.raises(InvalidBatchSchema, match="Batch item 2"):
            parse_batch_item(raw, 1)


class TestLoadBatchFile:
    def test_returns_raw_items(self, tmp_path: Path) -> None:
        path = tmp_path / "b.json"
        path.write_text(json.dumps([{"left": "a"}, 3]), encoding="utf-8")
        assert load_batch_file(path) == [{"left": "a"}, 3]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InputNotFound):
            load_batch_file(tmp_path / "none.json")

    def test_not_an_array(self, tmp_path: Path) -> None:
        path = tmp_path / "b.json"
        path.write_text("{}", encoding="utf-8")
        with pytest.raises(InvalidBatchSchema, match="JSON array"):
            load_batch_file(path)

    def test_not_json(self, tmp_path: Path) -> None:
        path = tmp_path / "b.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(InvalidBatchSchema, match="not valid JSON"):
            load_batch_file(path)


def test_jobs_from_groups_names_outputs() -> None:
    jobs = jobs_from_groups(
        [(Path("a_L.png"), Path("a_R.png"))], "jpeg",
    )
    assert jobs == [
        BatchJob(
            images=(Path("a_L.png"), Path("a_R.png")),
            out=Path("a_L_merged.jpg"),
            fmt="jpeg",
        ),
    ]
