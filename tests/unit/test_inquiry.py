"""Тесты для Inquiry State Machine и InquiryService.

Coverage:
- RECEIVED → QUOTED → DONE при ingestion, ровно одно уведомление
- terminal состояния при ingestion игнорируются
- send_quote: замена цены, уведомление, NotFound
- reject_inquiry: REJECTED без проверки и без уведомления
- customer_reject_inquiry: только из RECEIVED / QUOTED
"""

import pytest

from src.core.domain import Inquiry, InquiryState, Side
from src.hub import FunctionListener, NotFound
from src.inquiry import InquiryStateMachine, InvalidInquiryTransition
from src.services import InquiryService


@pytest.fixture
def make_inquiry(bond_2y):
    def _make(state: InquiryState = InquiryState.RECEIVED, inquiry_id: str = "INQ1") -> Inquiry:
        return Inquiry(
            inquiry_id=inquiry_id,
            product=bond_2y,
            side=Side.BUY,
            quantity=1_000_000,
            price=99.5,
            state=state,
        )

    return _make


@pytest.fixture
def service_with_log():
    service = InquiryService()
    notified: list[Inquiry] = []
    service.add_listener(FunctionListener(notified.append))
    return service, notified


class TestInquiryStateMachine:
    """Тесты вычисления переходов."""

    def test_received_goes_to_quoted_and_resubmits(self):
        result = InquiryStateMachine().on_ingest(InquiryState.RECEIVED)

        assert result.new_state == InquiryState.QUOTED
        assert result.transition_occurred
        assert result.resubmit
        assert not result.notify_listeners
        assert result.store

    def test_quoted_goes_to_done_with_notification(self):
        result = InquiryStateMachine().on_ingest(InquiryState.QUOTED)

        assert result.new_state == InquiryState.DONE
        assert result.notify_listeners
        assert not result.resubmit

    @pytest.mark.parametrize(
        "state", [InquiryState.DONE, InquiryState.REJECTED, InquiryState.CUSTOMER_REJECTED]
    )
    def test_terminal_ingest_ignored(self, state):
        result = InquiryStateMachine().on_ingest(state)

        assert result.new_state == state
        assert not result.transition_occurred
        assert not result.store
        assert not result.notify_listeners
        assert result.transition_reason == f"ignored_terminal_{state.value}"

    def test_reject_from_any_state(self):
        sm = InquiryStateMachine()
        for state in InquiryState:
            result = sm.on_reject(state)
            assert result.new_state == InquiryState.REJECTED
            assert not result.notify_listeners

    def test_reject_overriding_terminal_reason(self):
        result = InquiryStateMachine().on_reject(InquiryState.DONE)
        assert result.transition_reason == "rejected_overriding_DONE"

    def test_customer_reject_from_terminal_raises(self):
        with pytest.raises(InvalidInquiryTransition) as exc_info:
            InquiryStateMachine().on_customer_reject("INQ1", InquiryState.DONE)

        assert exc_info.value.from_state == InquiryState.DONE
        assert isinstance(exc_info.value, ValueError)


class TestInquiryService:
    """Тесты сервиса запросов."""

    def test_received_reaches_done_with_one_notification(self, service_with_log, make_inquiry):
        service, notified = service_with_log

        final = service.on_message(make_inquiry(InquiryState.RECEIVED))

        assert final.state == InquiryState.DONE
        assert service.get("INQ1").state == InquiryState.DONE
        assert [i.state for i in notified] == [InquiryState.DONE]

    def test_quoted_ingest_notifies_once(self, service_with_log, make_inquiry):
        service, notified = service_with_log
        service.on_message(make_inquiry(InquiryState.QUOTED))

        assert len(notified) == 1

    def test_terminal_ingest_not_stored(self, service_with_log, make_inquiry):
        service, notified = service_with_log

        assert service.on_message(make_inquiry(InquiryState.REJECTED)) is None
        assert "INQ1" not in service
        assert notified == []

    def test_terminal_ingest_keeps_existing_record(self, service_with_log, make_inquiry):
        service, notified = service_with_log
        service.on_message(make_inquiry(InquiryState.RECEIVED))
        service.on_message(make_inquiry(InquiryState.CUSTOMER_REJECTED))

        assert service.get("INQ1").state == InquiryState.DONE
        assert len(notified) == 1

    def test_send_quote_replaces_price(self, service_with_log, make_inquiry):
        service, notified = service_with_log
        service.on_message(make_inquiry(InquiryState.RECEIVED))

        quoted = service.send_quote("INQ1", 100.25)

        assert quoted.price == 100.25
        assert quoted.state == InquiryState.DONE
        assert service.get("INQ1").price == 100.25
        assert notified[-1] == quoted
        assert len(notified) == 2

    def test_send_quote_unknown_id(self):
        with pytest.raises(NotFound):
            InquiryService().send_quote("missing", 100.0)

    def test_reject_without_notification(self, service_with_log, make_inquiry):
        service, notified = service_with_log
        service.on_message(make_inquiry(InquiryState.RECEIVED))
        notified.clear()

        rejected = service.reject_inquiry("INQ1")

        assert rejected.state == InquiryState.REJECTED
        assert service.get("INQ1").state == InquiryState.REJECTED
        assert notified == []

    def test_reject_unknown_id(self):
        with pytest.raises(NotFound):
            InquiryService().reject_inquiry("missing")

    def test_customer_reject_from_live_state(self, service_with_log, make_inquiry):
        service, notified = service_with_log
        # QUOTED сохраняется без уведомления только внутри ingestion, поэтому
        # живое состояние кладём напрямую
        service._store("INQ1", make_inquiry(InquiryState.QUOTED))

        result = service.customer_reject_inquiry("INQ1")

        assert result.state == InquiryState.CUSTOMER_REJECTED
        assert notified == [result]

    def test_customer_reject_from_terminal_raises(self, service_with_log, make_inquiry):
        service, notified = service_with_log
        service.on_message(make_inquiry(InquiryState.RECEIVED))

        with pytest.raises(InvalidInquiryTransition):
            service.customer_reject_inquiry("INQ1")
        assert service.get("INQ1").state == InquiryState.DONE

    def test_customer_reject_unknown_id(self):
        with pytest.raises(NotFound):
            InquiryService().customer_reject_inquiry("missing")
