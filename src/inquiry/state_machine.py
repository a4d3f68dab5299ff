"""Inquiry State Machine — жизненный цикл клиентского запроса котировки.

Переходы:
- RECEIVED → QUOTED (при ingestion; без уведомления listeners, запись сразу повторно подаётся)
- QUOTED → DONE (при ingestion; listeners уведомляются ровно один раз)
- любое → REJECTED (явная операция reject, без проверки текущего состояния)
- RECEIVED / QUOTED → CUSTOMER_REJECTED (отказ клиента)
- DONE / REJECTED / CUSTOMER_REJECTED при ingestion → без перехода

Машина состояний не хранит записи и не мутирует их: она только вычисляет
результат перехода. Применение результата — задача InquiryService.
"""

from dataclasses import dataclass

from src.core.domain.inquiry import InquiryState


class InvalidInquiryTransition(ValueError):
    """Переход недопустим из текущего состояния."""

    def __init__(self, inquiry_id: str, from_state: InquiryState, to_state: InquiryState):
        self.inquiry_id = inquiry_id
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"inquiry {inquiry_id}: transition {from_state.value} → {to_state.value} not allowed"
        )


@dataclass(frozen=True)
class InquiryTransitionResult:
    """Результат перехода состояния inquiry."""

    new_state: InquiryState
    previous_state: InquiryState
    transition_occurred: bool
    transition_reason: str

    # Что сервис должен сделать с новой записью
    resubmit: bool  # повторно подать запись через ingestion
    notify_listeners: bool  # уведомить listeners
    store: bool  # сохранить запись


class InquiryStateMachine:
    """Вычисление переходов inquiry.

    States:
    - RECEIVED: запрос получен, котировка ещё не отправлена
    - QUOTED: котировка отправлена клиенту
    - DONE: сделка по котировке (terminal)
    - REJECTED: отклонён дилером (terminal)
    - CUSTOMER_REJECTED: отклонён клиентом (terminal)
    """

    def on_ingest(self, current_state: InquiryState) -> InquiryTransitionResult:
        """Переход при поступлении записи через ingestion.

        Args:
            current_state: состояние поступившей записи

        Returns:
            InquiryTransitionResult
        """
        if current_state == InquiryState.RECEIVED:
            return self._create_result(
                new_state=InquiryState.QUOTED,
                previous_state=current_state,
                transition_occurred=True,
                transition_reason="quoted",
                resubmit=True,
                notify_listeners=False,
                store=True,
            )

        if current_state == InquiryState.QUOTED:
            return self._create_result(
                new_state=InquiryState.DONE,
                previous_state=current_state,
                transition_occurred=True,
                transition_reason="done",
                resubmit=False,
                notify_listeners=True,
                store=True,
            )

        # Terminal состояния при ingestion не обрабатываются
        return self._create_result(
            new_state=current_state,
            previous_state=current_state,
            transition_occurred=False,
            transition_reason=f"ignored_terminal_{current_state.value}",
            resubmit=False,
            notify_listeners=False,
            store=False,
        )

    def on_reject(self, current_state: InquiryState) -> InquiryTransitionResult:
        """Переход в REJECTED.

        Выполняется из любого состояния, включая terminal.
        """
        reason = "rejected"
        if current_state.is_terminal:
            reason = f"rejected_overriding_{current_state.value}"

        return self._create_result(
            new_state=InquiryState.REJECTED,
            previous_state=current_state,
            transition_occurred=current_state != InquiryState.REJECTED,
            transition_reason=reason,
            resubmit=False,
            notify_listeners=False,
            store=True,
        )

    def on_customer_reject(
        self, inquiry_id: str, current_state: InquiryState
    ) -> InquiryTransitionResult:
        """Переход в CUSTOMER_REJECTED.

        Raises:
            InvalidInquiryTransition: если inquiry уже в terminal состоянии
        """
        if current_state.is_terminal:
            raise InvalidInquiryTransition(
                inquiry_id, current_state, InquiryState.CUSTOMER_REJECTED
            )

        return self._create_result(
            new_state=InquiryState.CUSTOMER_REJECTED,
            previous_state=current_state,
            transition_occurred=True,
            transition_reason="customer_rejected",
            resubmit=False,
            notify_listeners=True,
            store=True,
        )

    def _create_result(
        self,
        new_state: InquiryState,
        previous_state: InquiryState,
        transition_occurred: bool,
        transition_reason: str,
        resubmit: bool,
        notify_listeners: bool,
        store: bool,
    ) -> InquiryTransitionResult:
        """Создание результата перехода."""
        return InquiryTransitionResult(
            new_state=new_state,
            previous_state=previous_state,
            transition_occurred=transition_occurred,
            transition_reason=transition_reason,
            resubmit=resubmit,
            notify_listeners=notify_listeners,
            store=store,
        )
