"""\
OpenTelemetry
=============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Saturday, October 17 2026
Last updated on: Sunday, October 18 2026

This module provides `OpenTelemetry` integration for fskit. The
recursive operations, which may touch thousands of entries, run inside
a span so that their duration and entry counts show up next to the
traces of the application using the library.
"""

from __future__ import annotations

import threading

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
    OTLPSpanExporter,
)
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.export import ConsoleSpanExporter
from opentelemetry.sdk.trace.export import SimpleSpanProcessor

from fskit.core.config import Config

__all__: list[str] = ["get_tracer"]

_providers: dict[str, TracerProvider] = {}
_lock = threading.Lock()


def _provider(config: Config, service: str) -> TracerProvider:
    """Build, once per service name, the provider used by fskit."""
    with _lock:
        if service in _providers:
            return _providers[service]
        resource = Resource.create(
            {
                "service.name": service,
                "service.version": config.version,
                "deployment.environment": (
                    "development" if config.debug else "production"
                ),
                "telemetry.sdk.name": "fskit",
            }
        )
        if config.debug:
            processor = SimpleSpanProcessor(ConsoleSpanExporter())
        else:
            try:
                processor = BatchSpanProcessor(OTLPSpanExporter())
            except Exception:
                processor = SimpleSpanProcessor(ConsoleSpanExporter())
        provider = TracerProvider(resource=resource)
        provider.add_span_processor(processor)
        _providers[service] = provider
        return provider


def get_tracer(
    config: Config | None = None,
    name: str | None = None,
) -> trace.Tracer:
    """Return a tracer for the library's operations.

    When telemetry is disabled, which is the default, the tracer comes
    from the globally registered provider. That is a no-op unless the
    application configured `OpenTelemetry` itself, in which case fskit's
    spans join the application's traces. When telemetry is enabled,
    fskit exports through its own provider: to the console in debug mode
    and over OTLP otherwise.

    :param config: An optional configuration object. If not provided, a
        default `Config` instance is created.
    :param name: Override for the service name, defaults to `None`. If
        not provided, uses the name from the configuration.
    :return: An `OpenTelemetry Tracer` instance.
    """
    if config is None:
        config = Config()
    service = name or config.telemetry.name or config.name
    if not config.telemetry.enabled:
        return trace.get_tracer(service)
    return _provider(config, service).get_tracer(service)
