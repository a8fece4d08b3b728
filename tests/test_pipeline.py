"""Tests for the build pipeline host."""
from pathlib import Path
from typing import List

import pytest

from devcover.core.pipeline import BuildPipeline, BuildReport, OverwriteIconsProcessor
from devcover.core.processor import IconSetManager
from devcover.core.project_io import load_project


class _Recorder:
    def __init__(self, name: str, events: List[str], order: int = 0, fail_pre: bool = False) -> None:
        self.name = name
        self.events = events
        self.callback_order = order
        self.fail_pre = fail_pre

    def on_preprocess_build(self, report: BuildReport) -> None:
        self.events.append(f"pre:{self.name}")
        if self.fail_pre:
            raise RuntimeError("pre-build failed")

    def on_postprocess_build(self, report: BuildReport) -> None:
        self.events.append(f"post:{self.name}:{report.succeeded}")


def test_processors_run_around_the_step_in_callback_order() -> None:
    events: List[str] = []
    pipeline = BuildPipeline("Android", [_Recorder("late", events, order=5)])
    pipeline.register(_Recorder("early", events, order=-1))

    report = pipeline.build(lambda report: events.append("step"))

    assert events == ["pre:early", "pre:late", "step", "post:early:True", "post:late:True"]
    assert report.succeeded is True
    assert report.finished_at is not None


def test_post_build_runs_when_the_step_fails() -> None:
    events: List[str] = []
    pipeline = BuildPipeline("Android", [_Recorder("icons", events)])

    def step(report: BuildReport) -> None:
        raise RuntimeError("compile error")

    with pytest.raises(RuntimeError):
        pipeline.build(step)

    assert events == ["pre:icons", "post:icons:False"]


def test_failing_pre_build_aborts_the_build() -> None:
    events: List[str] = []
    pipeline = BuildPipeline("Android", [_Recorder("icons", events, fail_pre=True)])

    with pytest.raises(RuntimeError):
        pipeline.build(lambda report: events.append("step"))

    assert events == ["pre:icons"]


def test_icons_are_covered_only_during_the_build(project: Path) -> None:
    manager = IconSetManager.for_project(project)
    pipeline = BuildPipeline(manager.build_target, [OverwriteIconsProcessor(manager)])
    seen = []

    def step(report: BuildReport) -> None:
        seen.append(load_project(project).default_icons[0])

    pipeline.build(step)

    assert seen == ["Assets/Editor/Images/Icons/Combined.Icon.0.png"]
    assert load_project(project).default_icons[0] == "Assets/Icons/app.png"
    assert not manager.is_overwritten
