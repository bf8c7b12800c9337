"""
Summary: Tests for oldest-first greedy candidate selection.
Why: Selection decides which local copies are offered for deletion.
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from conftest import NOW, ProjectFactory
from parkr.features.prune import FORCE_WARNING, select_candidates
from parkr.features.safety import VerifyMode
from parkr.features.state import Project


def _three_projects(make_project: ProjectFactory) -> dict[str, Project]:
    _, newest = make_project("newest", size=50, modified=NOW - timedelta(days=6))
    _, oldest = make_project("oldest", size=10, modified=NOW - timedelta(days=30))
    _, middle = make_project("middle", size=25, modified=NOW - timedelta(days=20))
    return {"newest": newest, "oldest": oldest, "middle": middle}


def test_selects_oldest_first_until_target(make_project: ProjectFactory) -> None:
    projects = _three_projects(make_project)

    result = select_candidates(projects, 30)

    assert [c.name for c in result.candidates] == ["oldest", "middle", "newest"]
    assert [c.name for c in result.selected] == ["oldest", "middle"]
    assert result.total_selected == 35
    assert not result.insufficient_space
    assert not result.no_candidates


def test_insufficient_space_selects_everything(make_project: ProjectFactory) -> None:
    projects = _three_projects(make_project)

    result = select_candidates(projects, 1_000)

    assert len(result.selected) == 3
    assert result.total_selected == 85
    assert result.insufficient_space


def test_unsafe_projects_are_excluded(make_project: ProjectFactory) -> None:
    projects = _three_projects(make_project)
    _, unparked = make_project("unparked", size=5, parked=None, modified=NOW - timedelta(days=90))
    projects["unparked"] = unparked

    result = select_candidates(projects, 30, mode=VerifyMode.MTIME_ONLY)

    assert "unparked" not in [c.name for c in result.candidates]


def test_not_grabbed_projects_are_ignored(make_project: ProjectFactory) -> None:
    projects = _three_projects(make_project)
    projects["oldest"].is_grabbed = False

    result = select_candidates(projects, 30)

    assert [c.name for c in result.selected] == ["middle", "newest"]


def test_force_includes_never_parked_and_warns(make_project: ProjectFactory) -> None:
    _, unparked = make_project("unparked", size=40, parked=None)

    result = select_candidates({"unparked": unparked}, 10, force=True)

    assert [c.name for c in result.selected] == ["unparked"]
    assert result.forced
    assert FORCE_WARNING in result.warnings


def test_no_candidates(make_project: ProjectFactory) -> None:
    _, unparked = make_project("unparked", parked=None)

    result = select_candidates({"unparked": unparked}, 10)

    assert result.no_candidates
    assert result.candidates == []
    assert result.total_selected == 0


@pytest.mark.parametrize("target", [0, -1])
def test_target_must_be_positive(target: int) -> None:
    with pytest.raises(ValueError):
        _ = select_candidates({}, target)


def test_selection_does_not_mutate_projects(make_project: ProjectFactory) -> None:
    projects = _three_projects(make_project)
    snapshot = {name: project.to_dict() for name, project in projects.items()}

    _ = select_candidates(projects, 30)

    assert {name: project.to_dict() for name, project in projects.items()} == snapshot
