import os
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

os.environ.setdefault("TABLE_NAME", "booking-table-test")
os.environ.setdefault("AWS_DEFAULT_REGION", "ap-northeast-1")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "booking-engine-test")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "BookingEngineTest")
os.environ.setdefault("STRIPE_SECRET_NAME", "stripe/api-key")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET_NAME", "stripe/webhook-secret")

from services.shared.domain import TenantId  # noqa: E402

from tests.unit.services.fakes import FixedClock  # noqa: E402


@pytest.fixture
def tenant_id():
    """全テスト共通の TenantId フィクスチャ"""
    return TenantId(value="acme")


@pytest.fixture
def clock():
    """2025-06-01 12:00 UTC で止まった時計"""
    return FixedClock(datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def mock_repository():
    """リポジトリのモックフィクスチャ"""
    return MagicMock()


@pytest.fixture
def lambda_context():
    """Powertools の inject_lambda_context が参照する属性を持つコンテキスト"""
    context = MagicMock()
    context.function_name = "test-function"
    context.memory_limit_in_mb = 128
    context.invoked_function_arn = (
        "arn:aws:lambda:ap-northeast-1:123456789012:function:test-function"
    )
    context.aws_request_id = "req-123"
    return context
