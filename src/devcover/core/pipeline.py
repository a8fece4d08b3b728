"""A minimal build pipeline that runs processors around a build step."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Protocol

from .processor import IconSetManager

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BuildReport:
    """Summary of one build, handed to every processor."""

    target: str
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: datetime | None = None
    succeeded: bool | None = None


class BuildProcessor(Protocol):
    callback_order: int

    def on_preprocess_build(self, report: BuildReport) -> None: ...

    def on_postprocess_build(self, report: BuildReport) -> None: ...


class OverwriteIconsProcessor:
    """Covers the project icons before a build and restores them after it."""

    callback_order = 0

    def __init__(self, manager: IconSetManager) -> None:
        self.manager = manager

    def on_preprocess_build(self, report: BuildReport) -> None:
        self.manager.run_overwrite()

    def on_postprocess_build(self, report: BuildReport) -> None:
        self.manager.run_revert()


class BuildPipeline:
    """Runs pre-build processors, the build step, then post-build processors.

    A failing pre-build processor aborts the build. Post-build processors run
    once the pre-build phase completed, whether or not the step succeeded.
    """

    def __init__(self, target: str, processors: List[BuildProcessor] | None = None) -> None:
        self.target = target
        self._processors: List[BuildProcessor] = list(processors or [])

    def register(self, processor: BuildProcessor) -> None:
        self._processors.append(processor)

    @property
    def processors(self) -> List[BuildProcessor]:
        return sorted(self._processors, key=lambda processor: processor.callback_order)

    def build(self, step: Callable[[BuildReport], None]) -> BuildReport:
        report = BuildReport(target=self.target)
        processors = self.processors
        for processor in processors:
            processor.on_preprocess_build(report)

        try:
            step(report)
            report.succeeded = True
        except BaseException:
            report.succeeded = False
            raise
        finally:
            report.finished_at = datetime.now()
            for processor in processors:
                processor.on_postprocess_build(report)
            logger.info(
                "Build for %s %s",
                self.target,
                "succeeded" if report.succeeded else "failed",
            )
        return report
