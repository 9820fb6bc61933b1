"""Tests for stepflow.backends.otel.OTelBackend (needs the otel extra)."""

from __future__ import annotations

import pytest

pytest.importorskip("opentelemetry.sdk")

from conftest import FlakyStep, ScriptedPrompter  # noqa: E402
from opentelemetry.sdk.trace import TracerProvider  # noqa: E402
from opentelemetry.sdk.trace.export import SimpleSpanProcessor  # noqa: E402
from opentelemetry.sdk.trace.export.in_memory_span_exporter import (  # noqa: E402
    InMemorySpanExporter,
)
from opentelemetry.trace import StatusCode  # noqa: E402

from stepflow import Flow, configure  # noqa: E402
from stepflow.backends.otel import OTelBackend  # noqa: E402


@pytest.fixture
def exporter() -> InMemorySpanExporter:
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    configure(OTelBackend(tracer_provider=provider))
    return exporter


class TestSpans:
    def test_one_span_per_attempt(self, exporter: InMemorySpanExporter) -> None:
        flow = Flow("otel_flow")
        flow.add_step(FlakyStep(failures=1))
        flow.run(ScriptedPrompter())

        spans = exporter.get_finished_spans()
        assert [s.name for s in spans] == ["TextStep", "TextStep"]
        assert spans[0].attributes["stepflow.flow"] == "otel_flow"
        assert [s.attributes["stepflow.attempt"] for s in spans] == [1, 2]
        assert spans[0].status.status_code is StatusCode.ERROR
        assert spans[1].status.status_code is not StatusCode.ERROR

    def test_correlation_id_inside_span(self, exporter: InMemorySpanExporter) -> None:
        backend = OTelBackend(tracer_provider=TracerProvider())
        with backend.span("s", "f"):
            cid = backend.get_correlation_id()
        assert len(cid) == 32
