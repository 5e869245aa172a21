from __future__ import annotations

import itertools
from typing import TYPE_CHECKING
from uuid import UUID

import pytest

from rollbook.adapters.overlay_store import InMemoryOverlayStore
from rollbook.domain.matching import build_matchers
from rollbook.domain.model import Perspective, SubmissionType, TechniqueCategory
from rollbook.domain.ports import SystemCatalog
from rollbook.domain.taxonomy import build_taxonomy_index
from tests.helpers.catalog import make_position, make_technique

if TYPE_CHECKING:
    from collections.abc import Callable

    from rollbook.domain.matching import TaxonomyMatchers
    from rollbook.domain.model import Position, Technique
    from rollbook.domain.taxonomy import TaxonomyIndex


@pytest.fixture(scope="session")
def small_positions() -> tuple[Position, ...]:
    guard = make_position("guard", "Guard", perspective=Perspective.BOTTOM)
    mount = make_position("mount", "Mount", perspective=Perspective.TOP)
    side = make_position("side-control", "Side Control", perspective=Perspective.TOP)
    return (
        guard,
        make_position("closed-guard", "Closed Guard", parent=guard, perspective=Perspective.BOTTOM),
        make_position("open-guard", "Open Guard", parent=guard, perspective=Perspective.BOTTOM),
        make_position("half-guard", "Half Guard", parent=guard, perspective=Perspective.BOTTOM),
        mount,
        make_position("mount-bottom", "Mount Bottom", perspective=Perspective.BOTTOM),
        side,
        make_position("side-control-bottom", "Side Control Bottom", perspective=Perspective.BOTTOM),
    )


@pytest.fixture(scope="session")
def small_techniques() -> tuple[Technique, ...]:
    return (
        make_technique(
            "closed-guard-armbar",
            "Armbar",
            "closed-guard",
            aliases=("juji gatame",),
            submission_type=SubmissionType.ARMLOCK,
        ),
        make_technique(
            "triangle-choke",
            "Triangle Choke",
            "closed-guard",
            aliases=("triangle",),
            submission_type=SubmissionType.CHOKE,
        ),
        make_technique(
            "scissor-sweep", "Scissor Sweep", "closed-guard", category=TechniqueCategory.SWEEP
        ),
        make_technique(
            "hip-escape", "Hip Escape", "guard", category=TechniqueCategory.GUARD_RETENTION
        ),
        make_technique(
            "mount-armbar", "Armbar", "mount", submission_type=SubmissionType.ARMLOCK
        ),
        make_technique(
            "americana", "Americana", "mount", submission_type=SubmissionType.SHOULDER_LOCK
        ),
        make_technique(
            "mount-escape", "Escape", "mount-bottom", category=TechniqueCategory.ESCAPE
        ),
        make_technique(
            "side-escape", "Escape", "side-control-bottom", category=TechniqueCategory.ESCAPE
        ),
    )


@pytest.fixture(scope="session")
def small_index(
    small_positions: tuple[Position, ...],
    small_techniques: tuple[Technique, ...],
) -> TaxonomyIndex:
    return build_taxonomy_index(small_positions, small_techniques)


@pytest.fixture(scope="session")
def small_matchers(small_index: TaxonomyIndex) -> TaxonomyMatchers:
    return build_matchers(small_index)


@pytest.fixture
def small_system(
    small_positions: tuple[Position, ...],
    small_techniques: tuple[Technique, ...],
) -> SystemCatalog:
    return SystemCatalog(positions=small_positions, techniques=small_techniques)


@pytest.fixture
def overlay_store() -> InMemoryOverlayStore:
    return InMemoryOverlayStore()


@pytest.fixture
def sequential_ids() -> Callable[[], UUID]:
    counter = itertools.count(1)

    def factory() -> UUID:
        return UUID(int=next(counter))

    return factory
