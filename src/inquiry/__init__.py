"""Inquiry — жизненный цикл клиентских запросов котировки.

- RECEIVED → QUOTED → DONE
- RECEIVED / QUOTED → REJECTED / CUSTOMER_REJECTED
"""

from .state_machine import (
    InquiryStateMachine,
    InquiryTransitionResult,
    InvalidInquiryTransition,
)

__all__ = [
    "InquiryStateMachine",
    "InquiryTransitionResult",
    "InvalidInquiryTransition",
]
