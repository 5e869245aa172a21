"""Reconcile an extraction payload against the taxonomy.

The engine is a pure function: it reads the payload and the index snapshot
and returns a freshly built :class:`MatchedExtraction`. Neither input is
mutated and nothing is persisted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from rollbook.domain.matching import build_matchers

from .contracts import (
    MatchedExtraction,
    MatchedPositionNote,
    MatchedSession,
    MatchedSparringRound,
    MatchedSubmission,
    MatchedTechnique,
)
from .normalize import parse_gi_or_nogi

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rollbook.domain.matching import TaxonomyMatchers
    from rollbook.domain.taxonomy import TaxonomyIndex

    from .payload import (
        ExtractedPositionNote,
        ExtractedSparringRound,
        ExtractedTechnique,
        ExtractionPayload,
    )

type IdFactory = Callable[[], UUID]

log = logging.getLogger(__name__)


def reconcile(
    payload: ExtractionPayload,
    index: TaxonomyIndex,
    *,
    matchers: TaxonomyMatchers | None = None,
    id_factory: IdFactory = uuid4,
) -> MatchedExtraction:
    """Pair every name in ``payload`` with its best catalog match.

    Technique mentions are matched with the already resolved position as
    context so that ambiguous names ("escape") land under the right
    position. Submissions from sparring rounds carry no position and are
    matched globally.
    """

    active = matchers or build_matchers(index)
    session = payload.session

    techniques = tuple(
        _match_technique_mention(mention, active, id_factory) for mention in session.techniques
    )
    position_notes = tuple(
        _match_position_note(note, active, id_factory) for note in session.position_notes
    )
    rounds = tuple(
        _match_sparring_round(round_, active, id_factory) for round_ in payload.sparring_rounds
    )

    result = MatchedExtraction(
        session=MatchedSession(
            date=session.date,
            gi_or_nogi=parse_gi_or_nogi(session.gi_or_nogi),
            session_type=session.session_type,
            techniques=techniques,
            position_notes=position_notes,
        ),
        sparring_rounds=rounds,
    )
    log.info(
        "Reconciled extraction: techniques=%s, position_notes=%s, rounds=%s, "
        "unmatched_positions=%s, unmatched_techniques=%s",
        len(techniques),
        len(position_notes),
        len(rounds),
        len(result.unmatched_positions()),
        len(result.unmatched_techniques()),
    )
    return result


def _match_technique_mention(
    mention: ExtractedTechnique,
    matchers: TaxonomyMatchers,
    id_factory: IdFactory,
) -> MatchedTechnique:
    position_match = matchers.match_position(mention.position_name)
    context_id = position_match.entity.id if position_match else None
    technique_match = matchers.match_technique(mention.technique_name, context_id)
    return MatchedTechnique(
        id=id_factory(),
        position_name=mention.position_name,
        position_match=position_match,
        technique_name=mention.technique_name,
        technique_match=technique_match,
        notes=mention.notes,
        key_details=mention.key_details,
    )


def _match_position_note(
    note: ExtractedPositionNote,
    matchers: TaxonomyMatchers,
    id_factory: IdFactory,
) -> MatchedPositionNote:
    return MatchedPositionNote(
        id=id_factory(),
        position_name=note.position_name,
        position_match=matchers.match_position(note.position_name),
        notes=note.notes,
        key_details=note.key_details,
    )


def _match_sparring_round(
    round_: ExtractedSparringRound,
    matchers: TaxonomyMatchers,
    id_factory: IdFactory,
) -> MatchedSparringRound:
    return MatchedSparringRound(
        id=id_factory(),
        partner_name=round_.partner_name,
        partner_belt=round_.partner_belt,
        submissions_for=_match_submissions(round_.submissions_for, matchers),
        submissions_against=_match_submissions(round_.submissions_against, matchers),
        dominant_positions=round_.dominant_positions,
        stuck_positions=round_.stuck_positions,
        notes=round_.notes,
    )


def _match_submissions(
    names: Sequence[str],
    matchers: TaxonomyMatchers,
) -> tuple[MatchedSubmission, ...]:
    return tuple(
        MatchedSubmission(name=name, technique_match=matchers.match_technique(name))
        for name in names
    )
