from __future__ import annotations

import copy

from actioncatalog.domain.model import Confidence, Parameter
from actioncatalog.domain.reconciliation import (
    RawAction,
    Reconciler,
    SourceBatch,
    merge_parameters,
    merge_record,
    normalize_record,
)
from tests.helpers.actions import make_record

PRIMARY = "authoritative-actions.json"
SECONDARY = "final-action-database.json"
TERTIARY = "action-database.json"


def _reconcile(*batches: SourceBatch) -> Reconciler:
    reconciler = Reconciler(authoritative_source=PRIMARY)
    reconciler.add_all(batches)
    return reconciler


def test_authoritative_record_keeps_descriptive_fields() -> None:
    reconciler = _reconcile(
        SourceBatch(PRIMARY, {"a.b.c": RawAction(name="Foo", confidence=Confidence.AUTHORITATIVE)}),
        SourceBatch(SECONDARY, {"a.b.c": RawAction(name="Bar", description="d2")}),
    )

    record = reconciler.records["a.b.c"]
    assert record.name == "Foo"
    assert record.description == ""
    assert record.confidence is Confidence.AUTHORITATIVE
    assert record.sources == {PRIMARY, SECONDARY}


def test_authoritative_record_still_collects_examples() -> None:
    primary = normalize_record(
        "is.workflow.actions.gettext",
        RawAction(name="Get Text", category="text", description="original"),
        source=PRIMARY,
        authoritative=True,
    )
    primary.parameters = [Parameter(key="WFText")]
    incoming = normalize_record(
        "is.workflow.actions.gettext",
        RawAction(
            name="Other",
            category="media",
            description="replacement",
            usage_examples=("example",),
            related_actions=("is.workflow.actions.settext",),
            alternatives=("is.workflow.actions.copy",),
        ),
        source=SECONDARY,
    )

    merge_record(primary, incoming, source=SECONDARY, authoritative_source=PRIMARY)

    assert (primary.name, primary.category, primary.description) == (
        "Get Text",
        "text",
        "original",
    )
    assert primary.parameter_keys() == ["WFText"]
    assert primary.usage_examples == {"example"}
    assert primary.related_actions == {"is.workflow.actions.settext"}
    assert primary.alternatives == set()


def test_general_branch_fills_gaps_and_unions() -> None:
    existing = make_record(
        "is.workflow.actions.sendmessage",
        description="",
        parameters=["WFRecipients"],
        keywords={"message"},
    )
    incoming = make_record(
        "is.workflow.actions.sendmessage",
        description="Sends a message",
        parameters=["WFRecipients", "WFSendMessageContent"],
        keywords={"sms"},
        usage_examples={"text mom"},
    )

    merge_record(existing, incoming, source=SECONDARY, authoritative_source=PRIMARY)

    assert existing.description == "Sends a message"
    assert existing.parameter_keys() == ["WFRecipients", "WFSendMessageContent"]
    assert existing.keywords == {"message", "sms"}
    assert existing.usage_examples == {"text mom"}
    assert SECONDARY in existing.sources


def test_existing_description_is_not_replaced() -> None:
    existing = make_record(description="first")
    incoming = make_record(description="second")

    merge_record(existing, incoming, source=SECONDARY, authoritative_source=PRIMARY)

    assert existing.description == "first"


def test_parameter_fields_fall_back_to_incoming() -> None:
    existing = [Parameter(key="WFMode", label="Mode")]
    incoming = [
        Parameter(key="WFMode", label="Ignored", description="How to run", options=["a", "b"]),
        Parameter(key="WFExtra"),
    ]

    merged = merge_parameters(existing, incoming)

    assert [parameter.key for parameter in merged] == ["WFMode", "WFExtra"]
    assert merged[0].label == "Mode"
    assert merged[0].description == "How to run"
    assert merged[0].options == ["a", "b"]


def test_confidence_is_at_least_max_of_sources() -> None:
    reconciler = _reconcile(
        SourceBatch(SECONDARY, {"x.y": RawAction(confidence=Confidence.LOW)}),
        SourceBatch(TERTIARY, {"x.y": RawAction(confidence=Confidence.HIGH)}),
    )
    assert reconciler.records["x.y"].confidence is Confidence.HIGH

    reconciler = _reconcile(
        SourceBatch(SECONDARY, {"x.y": RawAction(confidence=Confidence.HIGH)}),
        SourceBatch(TERTIARY, {"x.y": RawAction(confidence=Confidence.LOW)}),
    )
    assert reconciler.records["x.y"].confidence is Confidence.HIGH


def test_secondary_authoritative_claim_is_capped() -> None:
    reconciler = _reconcile(
        SourceBatch(SECONDARY, {"x.y": RawAction(confidence=Confidence.AUTHORITATIVE)}),
    )

    assert reconciler.records["x.y"].confidence is Confidence.HIGH


def test_reloaded_records_add_no_tag_or_summary() -> None:
    reconciler = _reconcile(
        SourceBatch(
            PRIMARY,
            {"is.workflow.actions.gettext": RawAction(name="Get Text", keywords=("text",))},
        ),
        SourceBatch(
            SECONDARY,
            {"is.workflow.actions.count": RawAction(description="Counts", usage_examples=("n",))},
        ),
    )
    before = copy.deepcopy(reconciler.records)
    summaries = list(reconciler.summaries)
    reloaded = {
        identifier: RawAction(
            name=record.name,
            description=record.description,
            keywords=tuple(record.keywords),
            confidence=record.confidence,
            sources=tuple(record.sources),
            usage_examples=tuple(record.usage_examples),
        )
        for identifier, record in before.items()
    }

    reconciler.add(SourceBatch("previous-catalog.json", reloaded))

    assert reconciler.records == before
    assert reconciler.summaries == summaries


def test_batch_citing_unmerged_source_is_tagged() -> None:
    reconciler = _reconcile(SourceBatch(PRIMARY, {"a.b": RawAction()}))

    reconciler.add(SourceBatch(SECONDARY, {"a.b": RawAction(sources=(PRIMARY, "elsewhere"))}))

    assert reconciler.records["a.b"].sources == {PRIMARY, SECONDARY, "elsewhere"}
    assert [summary.source_tag for summary in reconciler.summaries] == [PRIMARY, SECONDARY]


def test_untagged_merge_keeps_provenance() -> None:
    existing = make_record("a.b", sources={PRIMARY})

    merge_record(
        existing,
        normalize_record("a.b", RawAction(sources=(PRIMARY,))),
        source=None,
        authoritative_source=PRIMARY,
    )

    assert existing.sources == {PRIMARY}


def test_source_summaries_follow_processing_order() -> None:
    reconciler = _reconcile(
        SourceBatch(PRIMARY, {"a.b": RawAction(), "c.d": RawAction()}),
        SourceBatch(SECONDARY, {"a.b": RawAction()}),
        SourceBatch(TERTIARY, {}),
    )

    assert [(s.source_tag, s.record_count, s.priority_rank) for s in reconciler.summaries] == [
        (PRIMARY, 2, 1),
        (SECONDARY, 1, 2),
        (TERTIARY, 0, 3),
    ]
