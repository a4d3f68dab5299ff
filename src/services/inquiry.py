"""InquiryService — обработка клиентских запросов котировки.

Переходы вычисляет InquiryStateMachine; сервис применяет результат:
сохраняет новую запись (с уведомлением или без) и при необходимости
повторно подаёт её через on_message.
"""

from typing import Optional

from src.core.domain.inquiry import Inquiry
from src.core.logging import get_logger
from src.hub import PublishSubscribeHub
from src.inquiry.state_machine import InquiryStateMachine, InquiryTransitionResult

from .historical_data import ServiceType

logger = get_logger(__name__)


class InquiryService(PublishSubscribeHub[str, Inquiry]):
    """Keyed store запросов: inquiry_id → Inquiry."""

    service_type = ServiceType.INQUIRY

    def __init__(self, state_machine: Optional[InquiryStateMachine] = None):
        super().__init__()
        self.state_machine = state_machine or InquiryStateMachine()

    def on_message(self, inquiry: Inquiry) -> Optional[Inquiry]:
        """
        Ingestion запроса.

        RECEIVED → QUOTED (без уведомления) → повторная подача → DONE (уведомление).
        Запись в terminal состоянии игнорируется.

        Returns:
            Итоговая сохранённая запись или None, если запись проигнорирована
        """
        result = self.state_machine.on_ingest(inquiry.state)

        if not result.store:
            logger.debug(
                "inquiry_ignored",
                inquiry_id=inquiry.inquiry_id,
                reason=result.transition_reason,
            )
            return None

        updated = self._apply(inquiry, result)

        if result.resubmit:
            return self.on_message(updated)
        return updated

    def send_quote(self, inquiry_id: str, price: float) -> Inquiry:
        """
        Котировка по запросу: цена заменяется, состояние не меняется.

        Raises:
            NotFound: Если inquiry_id неизвестен
        """
        updated = self.get(inquiry_id).with_price(price)
        logger.info("inquiry_quoted", inquiry_id=inquiry_id, price=price)
        self.upsert(inquiry_id, updated)
        return updated

    def reject_inquiry(self, inquiry_id: str) -> Inquiry:
        """
        Отклонение запроса дилером: REJECTED из любого состояния, без уведомления.

        Raises:
            NotFound: Если inquiry_id неизвестен
        """
        inquiry = self.get(inquiry_id)
        result = self.state_machine.on_reject(inquiry.state)

        if result.previous_state.is_terminal:
            logger.warning(
                "inquiry_reject_overrides_terminal",
                inquiry_id=inquiry_id,
                previous_state=result.previous_state.value,
            )

        return self._apply(inquiry, result)

    def customer_reject_inquiry(self, inquiry_id: str) -> Inquiry:
        """
        Отказ клиента: RECEIVED / QUOTED → CUSTOMER_REJECTED.

        Raises:
            NotFound: Если inquiry_id неизвестен
            InvalidInquiryTransition: Если запрос уже в terminal состоянии
        """
        inquiry = self.get(inquiry_id)
        result = self.state_machine.on_customer_reject(inquiry_id, inquiry.state)
        return self._apply(inquiry, result)

    def _apply(self, inquiry: Inquiry, result: InquiryTransitionResult) -> Inquiry:
        updated = inquiry.with_state(result.new_state)

        logger.debug(
            "inquiry_transition",
            inquiry_id=inquiry.inquiry_id,
            from_state=result.previous_state.value,
            to_state=result.new_state.value,
            reason=result.transition_reason,
        )

        if result.notify_listeners:
            self.upsert(updated.inquiry_id, updated)
        else:
            self._store(updated.inquiry_id, updated)
        return updated
