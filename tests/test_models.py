# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the request/response models to ensure:
# - camelCase wire keys are accepted and emitted
# - Invalid data raises ValidationError
# - Default values work as expected
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from core.models import (
    AnalysisResponse,
    InvestmentRecord,
    InvestmentRequest,
    InvestResponse,
    PriceResponse,
    RiskAnalysis,
    RiskLevel,
    UserDetail,
    UserInvestmentRequest,
    UserRequest,
    UserSummary,
)


# =============================================================================
# Market Models
# =============================================================================

class TestPriceResponse:
    """Tests for PriceResponse model."""

    def test_valid_price(self):
        quote = PriceResponse(
            price=0.48,
            currency="USD",
            token_id="sonic-3",
            timestamp="2025-01-15T10:30:00+00:00",
        )

        assert quote.success is True
        assert quote.price == 0.48

    def test_price_must_be_positive(self):
        with pytest.raises(ValidationError):
            PriceResponse(price=0, currency="USD", token_id="sonic-3", timestamp="now")


class TestRiskAnalysis:
    """Tests for RiskAnalysis model."""

    def test_serializes_camel_case(self):
        analysis = RiskAnalysis(
            risk_level=RiskLevel.MEDIUM,
            recommendation="Moderate movement",
            suggested_investment=50,
            moving_average=0.5,
            current_price=0.52,
        )

        data = analysis.model_dump(by_alias=True, mode="json")

        assert data == {
            "riskLevel": "medium",
            "recommendation": "Moderate movement",
            "suggestedInvestment": 50.0,
            "movingAverage": 0.5,
            "currentPrice": 0.52,
        }

    def test_envelope_keeps_token_id(self):
        analysis = RiskAnalysis(
            risk_level="low",
            recommendation="Stable",
            suggested_investment=100,
            moving_average=1.0,
            current_price=1.0,
        )
        envelope = AnalysisResponse(token_id="sonic-3", analysis=analysis, timestamp="t")

        data = envelope.model_dump(by_alias=True)

        assert data["token_id"] == "sonic-3"
        assert data["analysis"]["riskLevel"] == RiskLevel.LOW


# =============================================================================
# Investment Models
# =============================================================================

class TestInvestmentRequest:
    """Tests for InvestmentRequest model."""

    def test_camel_case_input(self):
        request = InvestmentRequest.model_validate(
            {"amount": 100, "riskLevel": "high", "walletAddress": "0xabc"}
        )

        assert request.amount == 100
        assert request.risk_level == RiskLevel.HIGH
        assert request.wallet_address == "0xabc"

    def test_all_fields_optional(self):
        request = InvestmentRequest.model_validate({})

        assert request.amount is None
        assert request.risk_level is None

    def test_unknown_risk_level_rejected(self):
        with pytest.raises(ValidationError):
            InvestmentRequest.model_validate({"amount": 10, "riskLevel": "extreme"})

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            InvestmentRequest.model_validate({"amount": -1, "riskLevel": "low"})

    @pytest.mark.parametrize("amount", [float("inf"), float("nan")])
    def test_non_finite_amount_rejected(self, amount):
        with pytest.raises(ValidationError):
            InvestmentRequest.model_validate({"amount": amount, "riskLevel": "low"})


class TestInvestmentRecord:
    """Tests for InvestmentRecord model."""

    def test_timestamp_defaults_to_now(self):
        before = datetime.now(timezone.utc)
        record = InvestmentRecord(
            amount=25,
            risk_level=RiskLevel.HIGH,
            transaction_hash="0xabc",
        )

        assert record.timestamp >= before
        assert record.token_price is None

    def test_naive_timestamp_read_as_utc(self):
        record = InvestmentRecord.model_validate({
            "amount": 25,
            "riskLevel": "high",
            "transactionHash": "0xabc",
            "timestamp": "2025-01-15T10:30:00",
        })

        assert record.timestamp == datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_requires_transaction_hash(self):
        with pytest.raises(ValidationError):
            InvestmentRecord(amount=25, risk_level="high", transaction_hash="")

    def test_nested_in_user_investment_request(self):
        request = UserInvestmentRequest.model_validate({
            "walletAddress": "0xabc",
            "investment": {
                "amount": 100,
                "riskLevel": "low",
                "tokenPrice": 0.48,
                "transactionHash": "0x5f",
                "timestamp": "2025-01-15T10:30:00Z",
            },
        })

        assert request.investment.token_price == 0.48
        assert request.investment.timestamp.tzinfo is not None


class TestInvestResponse:
    """Tests for InvestResponse model."""

    def test_serializes_transaction_hash_camel_case(self):
        response = InvestResponse(message="ok", transaction_hash="0x1", timestamp="t")

        assert response.model_dump(by_alias=True)["transactionHash"] == "0x1"


# =============================================================================
# User Models
# =============================================================================

class TestUserModels:
    """Tests for user request and summary models."""

    def test_chain_id_accepts_hex_or_int(self):
        assert UserRequest.model_validate({"chainId": "0xdede"}).chain_id == "0xdede"
        assert UserRequest.model_validate({"chainId": 57054}).chain_id == 57054

    def test_naive_last_seen_read_as_utc(self):
        request = UserRequest.model_validate({"lastSeen": "2025-01-15T10:30:00"})

        assert request.last_seen.tzinfo is timezone.utc
        assert request.last_seen.isoformat() == "2025-01-15T10:30:00+00:00"

    def test_aware_last_seen_kept(self):
        request = UserRequest.model_validate({"lastSeen": "2025-01-15T10:30:00+02:00"})

        assert request.last_seen.utcoffset().total_seconds() == 7200

    def test_summary_from_row(self):
        row = {
            "wallet_address": "0xabc",
            "first_seen": "2025-01-01T00:00:00+00:00",
            "last_seen": "2025-01-02T00:00:00+00:00",
            "chain_id": "0xdede",
        }

        summary = UserSummary.from_row(row)
        data = summary.model_dump(by_alias=True)

        assert data["walletAddress"] == "0xabc"
        assert set(data) == {"walletAddress", "firstSeen", "lastSeen"}

    def test_detail_defaults_to_empty_history(self):
        detail = UserDetail(
            wallet_address="0xabc",
            first_seen=datetime.now(timezone.utc),
            last_seen=datetime.now(timezone.utc),
        )

        assert detail.investments == []
        assert detail.chain_id is None
