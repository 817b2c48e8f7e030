"""OpenTelemetry 계측 설정

Backend 전역에서 사용하는 OTel 초기화 로직과
회의 → 태스크 제안 파이프라인 전용 메트릭을 제공합니다.
"""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.semconv.resource import ResourceAttributes

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)


def init_telemetry(
    service_name: str,
    service_version: str = "0.1.0",
    otlp_endpoint: str | None = None,
) -> tuple[trace.Tracer, metrics.Meter]:
    """OpenTelemetry 초기화

    Args:
        service_name: 서비스 이름 (예: "suggestions-backend")
        service_version: 서비스 버전
        otlp_endpoint: OTLP 수신 엔드포인트 (기본값: OTEL_EXPORTER_OTLP_ENDPOINT 환경변수)

    Returns:
        (Tracer, Meter) 튜플
    """
    endpoint = otlp_endpoint or os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4317")

    resource = Resource.create(
        {
            ResourceAttributes.SERVICE_NAME: service_name,
            ResourceAttributes.SERVICE_VERSION: service_version,
            ResourceAttributes.DEPLOYMENT_ENVIRONMENT: os.getenv("APP_ENV", "development"),
        }
    )

    tracer_provider = TracerProvider(resource=resource)
    trace.set_tracer_provider(tracer_provider)

    metric_reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=endpoint, insecure=True),
        export_interval_millis=10000,  # 10초마다 export
    )
    meter_provider = MeterProvider(resource=resource, metric_readers=[metric_reader])
    metrics.set_meter_provider(meter_provider)

    tracer = trace.get_tracer(service_name, service_version)
    meter = metrics.get_meter(service_name, service_version)

    logger.info(
        "Telemetry initialized: service=%s, endpoint=%s",
        service_name,
        endpoint,
    )

    return tracer, meter


def instrument_fastapi(app: FastAPI) -> None:
    """FastAPI 자동 계측"""
    try:
        from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

        FastAPIInstrumentor.instrument_app(app)
        logger.info("FastAPI instrumentation enabled")
    except Exception as e:
        logger.warning("Failed to instrument FastAPI: %s", e)


def instrument_httpx() -> None:
    """HTTPX 자동 계측 (Oracle 호출 span)"""
    try:
        from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor

        HTTPXClientInstrumentor().instrument()
        logger.info("HTTPX instrumentation enabled")
    except Exception as e:
        logger.warning("Failed to instrument HTTPX: %s", e)


# ===========================================
# 제안 파이프라인 전용 메트릭
# ===========================================


class SuggestionMetrics:
    """회의 → 태스크 제안 파이프라인 메트릭"""

    def __init__(self, meter: metrics.Meter):
        self.meter = meter
        self._init_oracle_metrics()
        self._init_lifecycle_metrics()

    def _init_oracle_metrics(self) -> None:
        """Oracle 호출 메트릭"""
        self.oracle_requests_total = self.meter.create_counter(
            name="suggestion_oracle_requests_total",
            description="Oracle 호출 결과 (success/fallback/unconfigured)",
        )
        self.oracle_request_duration = self.meter.create_histogram(
            name="suggestion_oracle_request_duration_seconds",
            description="Oracle 요청 → 응답 파싱 완료 시간",
            unit="s",
        )

    def _init_lifecycle_metrics(self) -> None:
        """제안 생성/검토 메트릭"""
        self.suggestions_generated_total = self.meter.create_counter(
            name="suggestion_generated_total",
            description="저장된 제안 수",
        )
        self.suggestion_reviews_total = self.meter.create_counter(
            name="suggestion_reviews_total",
            description="제안 검토 수 (approved/rejected)",
        )


# ===========================================
# 싱글톤 인스턴스 및 접근자
# ===========================================

_tracer: trace.Tracer | None = None
_meter: metrics.Meter | None = None
_suggestion_metrics: SuggestionMetrics | None = None
_initialized: bool = False


def get_tracer() -> trace.Tracer:
    """Tracer 인스턴스 반환 (초기화 안 된 경우 noop tracer 반환)"""
    if _tracer is None:
        return trace.get_tracer("suggestions-noop")
    return _tracer


def get_suggestion_metrics() -> SuggestionMetrics | None:
    """제안 메트릭 인스턴스 반환 (초기화 안 된 경우 None)"""
    return _suggestion_metrics


def setup_telemetry(service_name: str, service_version: str = "0.1.0") -> None:
    """전역 telemetry 설정 (애플리케이션 시작 시 호출)"""
    global _tracer, _meter, _suggestion_metrics, _initialized

    if _initialized:
        logger.warning("Telemetry already initialized, skipping")
        return

    _tracer, _meter = init_telemetry(service_name, service_version)
    _suggestion_metrics = SuggestionMetrics(_meter)
    instrument_httpx()
    _initialized = True


@contextmanager
def timed_operation():
    """시간 측정 컨텍스트 매니저

    Usage:
        with timed_operation() as timer:
            # do something
        # timer.duration에 경과 시간 저장됨
    """

    class Timer:
        def __init__(self):
            self.start_time = time.perf_counter()
            self.duration: float = 0.0

    timer = Timer()
    try:
        yield timer
    finally:
        timer.duration = time.perf_counter() - timer.start_time
