#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Ordered execution of named installation stages."""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from erpnext_installer.installer.configs.constants.enums import InstallerResult
from erpnext_installer.installer.core.install_context import InstallState
from erpnext_installer.installer.utils.exceptions import DeploymentError, StageError
from erpnext_installer.installer.utils.logger_utils import InstallerLogger


@dataclass(frozen=True)
class InstallStage:
    """One step of the installation.

    action receives the shared InstallState, records what it produced on it and
    returns SUCCESS, or SKIPPED when there was nothing to do. requires names the
    InstallState fields that must be set before the action runs. A recoverable
    stage may fail with DeploymentError(recoverable=True) without ending the run.
    """

    name: str
    action: Callable[[InstallState], Optional[InstallerResult]]
    requires: Tuple[str, ...] = ()
    recoverable: bool = False

    def missing_requirements(self, state: InstallState) -> List[str]:
        return [field_name for field_name in self.requires if getattr(state, field_name, None) is None]


def run_stages(stages: Sequence[InstallStage], state: InstallState) -> List[Tuple[str, InstallerResult]]:
    """Run stages in order, stopping at the first fatal failure.

    Returns (stage name, result) for every stage that ran.
    """
    results: List[Tuple[str, InstallerResult]] = []

    for stage in stages:
        InstallerLogger.start(stage.name)

        missing = stage.missing_requirements(state)
        if missing:
            InstallerLogger.end(stage.name, InstallerResult.FAILURE, f"missing {', '.join(missing)}")
            raise StageError(stage.name, missing)

        try:
            result = stage.action(state) or InstallerResult.SUCCESS
        except DeploymentError as e:
            if stage.recoverable and e.recoverable:
                InstallerLogger.end(stage.name, InstallerResult.FAILURE, str(e))
                InstallerLogger.warning(f"Continuing without {stage.name}")
                results.append((stage.name, InstallerResult.FAILURE))
                continue
            InstallerLogger.end(stage.name, InstallerResult.FAILURE, str(e))
            raise
        except Exception as e:
            InstallerLogger.end(stage.name, InstallerResult.FAILURE, str(e))
            raise

        InstallerLogger.end(stage.name, result)
        state.completed_stages.append(stage.name)
        results.append((stage.name, result))

    return results
