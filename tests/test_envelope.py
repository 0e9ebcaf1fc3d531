"""Tests for the transaction response envelope."""
import json
import pytest
from decimal import Decimal
from pydantic import ValidationError
from wallet_transactions.exceptions import TransactionDecodingError, TransactionUnavailableError
from wallet_transactions.models.envelope import TransactionEnvelope
from wallet_transactions.models.money import Money
from wallet_transactions.models.status import TransactionStatus
from wallet_transactions.models.transaction import (
    ConfirmedTransaction,
    TransactionInfo,
    create_money_request,
    create_send_money_request,
)


def test_from_wire_dict(response_payload):
    """Test decoding a parsed response."""
    envelope = TransactionEnvelope.from_wire(response_payload)
    
    assert envelope.success is True
    assert envelope.errors == []
    assert isinstance(envelope.transaction, ConfirmedTransaction)


def test_from_wire_text(response_payload):
    """Test decoding raw JSON text and bytes."""
    text = json.dumps(response_payload)
    
    assert TransactionEnvelope.from_wire(text) == TransactionEnvelope.from_wire(text.encode("utf-8"))
    assert TransactionEnvelope.from_wire(text).id == "501a1791f8182b2071000087"


def test_forwards_every_read(response_payload):
    """Test the envelope answers like the transaction it holds."""
    envelope = TransactionEnvelope.from_wire(response_payload)
    tx = envelope.transaction
    
    assert isinstance(envelope, TransactionInfo)
    assert envelope.id == tx.id
    assert envelope.created_at == tx.created_at
    assert envelope.amount == tx.amount
    assert envelope.is_request == tx.is_request
    assert envelope.status is TransactionStatus.PENDING
    assert envelope.sender == tx.sender
    assert envelope.recipient == tx.recipient
    assert envelope.recipient_address == tx.recipient_address
    assert envelope.notes == tx.notes
    assert envelope.transaction_hash == tx.transaction_hash
    assert envelope.idempotency_key == tx.idempotency_key


def test_json_numbers_stay_exact(response_payload):
    """Test numeric JSON amounts decode without float rounding."""
    text = json.dumps(response_payload).replace('"-1.23400000"', "0.1")
    
    envelope = TransactionEnvelope.from_wire(text)
    
    assert envelope.amount == Money.of("BTC", Decimal("0.1"))


def test_failure_response():
    """Test failure responses keep their errors and hold no transaction."""
    envelope = TransactionEnvelope.from_wire({"success": False, "errors": ["insufficient funds"]})
    
    assert envelope.success is False
    assert envelope.errors == ["insufficient funds"]
    assert envelope.transaction is None
    with pytest.raises(TransactionUnavailableError) as exc_info:
        envelope.amount
    
    assert exc_info.value.errors == ["insufficient funds"]
    assert "insufficient funds" in str(exc_info.value)


def test_null_errors_become_empty(response_payload):
    """Test a null error list decodes as empty."""
    response_payload["errors"] = None
    
    assert TransactionEnvelope.from_wire(response_payload).errors == []


def test_missing_errors_become_empty(response_payload):
    """Test a missing error list decodes as empty."""
    del response_payload["errors"]
    
    assert TransactionEnvelope.from_wire(response_payload).errors == []


def test_unknown_status_fails(response_payload):
    """Test an unknown status is a decoding failure."""
    response_payload["transaction"]["status"] = "refunded"
    
    with pytest.raises(TransactionDecodingError) as exc_info:
        TransactionEnvelope.from_wire(response_payload)
    
    assert "refunded" in str(exc_info.value)
    assert exc_info.value.__cause__ is not None


@pytest.mark.parametrize("payload", ["{not json", b"\xff\xfe", "[1, 2]", '"text"'])
def test_malformed_json_fails(payload):
    """Test malformed or non-object JSON is a decoding failure."""
    with pytest.raises(TransactionDecodingError):
        TransactionEnvelope.from_wire(payload)


def test_missing_success_fails(response_payload):
    """Test the success flag is required."""
    del response_payload["success"]
    
    with pytest.raises(TransactionDecodingError):
        TransactionEnvelope.from_wire(response_payload)


def test_float_amount_in_dict_fails(response_payload):
    """Test binary float amounts in a parsed payload are refused."""
    response_payload["transaction"]["amount"]["amount"] = 0.1
    
    with pytest.raises(TransactionDecodingError):
        TransactionEnvelope.from_wire(response_payload)


def test_outbound_shape_rejected():
    """Test an inbound response must carry a confirmed transaction."""
    payload = {
        "success": True,
        "errors": [],
        "transaction": {"amount_string": "1", "amount_currency_iso": "USD", "to": "bob@example.com"},
    }
    
    with pytest.raises(TransactionDecodingError):
        TransactionEnvelope.from_wire(payload)


def test_wrap_outbound():
    """Test wrapping a freshly built request."""
    request = create_send_money_request("bob@example.com", "10.00", "USD").with_notes("gift")
    
    envelope = TransactionEnvelope.wrap(request)
    
    assert envelope.success is True
    assert envelope.errors == []
    assert envelope.transaction is request
    assert envelope.notes == "gift"
    assert envelope.is_request is True
    assert envelope.id is None
    assert envelope.status is None
    assert envelope.amount == Money.of("USD", "10.00")


def test_wrap_money_request():
    """Test a wrapped money request keeps its variant."""
    request = create_money_request("alice@example.com", "0.5", "BTC")
    
    envelope = TransactionEnvelope.wrap(request)
    
    assert envelope.transaction is request
    assert envelope.idempotency_key is None


def test_to_submission():
    """Test the submission body nests the outbound payload."""
    request = create_send_money_request("bob@example.com", "10.00", "USD").with_idempotency_key("k1")
    
    body = TransactionEnvelope.wrap(request).to_submission()
    
    assert body == {"transaction": request.to_wire()}
    assert body["transaction"]["idem"] == "k1"


def test_to_submission_requires_outbound(response_payload):
    """Test confirmed transactions are not submitted."""
    envelope = TransactionEnvelope.from_wire(response_payload)
    
    with pytest.raises(TypeError):
        envelope.to_submission()


def test_failure_response_with_partial_transaction():
    """Test a failed response with an unreadable transaction keeps its errors."""
    payload = {
        "success": False,
        "errors": ["You don't have that much."],
        "transaction": {"id": None, "amount": None, "notes": "", "status": None},
    }
    
    envelope = TransactionEnvelope.from_wire(payload)
    
    assert envelope.success is False
    assert envelope.errors == ["You don't have that much."]
    assert envelope.transaction is None
    with pytest.raises(TransactionUnavailableError):
        envelope.amount


def test_failure_response_with_partial_transaction_text():
    """Test the same failed response decodes from raw JSON."""
    text = '{"success": false, "errors": ["Invalid amount"], "transaction": {"amount": null, "status": "bogus"}}'
    
    envelope = TransactionEnvelope.from_wire(text)
    
    assert envelope.success is False
    assert envelope.errors == ["Invalid amount"]
    assert envelope.transaction is None


def test_failure_response_keeps_readable_transaction(response_payload):
    """Test a failed response keeps a transaction that decodes cleanly."""
    response_payload["success"] = False
    response_payload["errors"] = ["Pending review"]
    
    envelope = TransactionEnvelope.from_wire(response_payload)
    
    assert isinstance(envelope.transaction, ConfirmedTransaction)
    assert envelope.errors == ["Pending review"]


def test_failure_response_with_bad_errors_fails():
    """Test a failed response still needs a valid error list."""
    payload = {"success": False, "errors": "nope", "transaction": {"amount": None}}
    
    with pytest.raises(TransactionDecodingError):
        TransactionEnvelope.from_wire(payload)


def test_envelope_is_immutable(response_payload):
    """Test a decoded envelope cannot be changed."""
    envelope = TransactionEnvelope.from_wire(response_payload)
    
    with pytest.raises(ValidationError):
        envelope.success = False
    with pytest.raises(ValidationError):
        envelope.errors = ["edited"]
