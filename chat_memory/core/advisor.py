"""
Advisor chain for the chat client's call pipeline.

An *advisor* is an interceptor wrapped around a model call: it receives
the request and the chain, may adjust the request, hands it to the next
link with ``chain.next_call(request)`` and may adjust the response on the
way back.  The chain ends in a terminal callable that performs the call.

``CallAroundAdvisorChain.next_around_call`` is the older entry point and
is kept only so existing advisors keep working; new code should call
``next_call``.
"""

from __future__ import annotations

import warnings
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from .messages import Message

Advisor = Callable[["AdvisedRequest", "CallAdvisorChain"], "AdvisedResponse"]
Terminal = Callable[["AdvisedRequest"], "AdvisedResponse"]


class AdvisedRequest(BaseModel):
    """Request travelling down the advisor chain"""
    user_text: str = Field(description="The user's input for this turn")
    system_text: Optional[str] = Field(None, description="Optional system instructions")
    messages: List[Message] = Field(default_factory=list, description="Prior conversation turns")
    advise_context: Dict[str, Any] = Field(default_factory=dict, description="State shared between advisors")


class AdvisedResponse(BaseModel):
    """Response travelling back up the advisor chain"""
    response: Any = Field(None, description="The model response")
    advise_context: Dict[str, Any] = Field(default_factory=dict, description="State shared between advisors")


class CallAdvisorChain(ABC):
    """A chain of advisors around a blocking model call."""

    @abstractmethod
    def next_call(self, request: AdvisedRequest) -> AdvisedResponse:
        """Invoke the next advisor in the chain with *request*."""


class CallAroundAdvisorChain(CallAdvisorChain):
    """
    Deprecated: use :class:`CallAdvisorChain` and ``next_call``.
    """

    def next_around_call(self, advised_request: AdvisedRequest) -> AdvisedResponse:
        """
        Invoke the next around-advisor with *advised_request*.

        Deprecated in favor of ``next_call``.
        """
        warnings.warn(
            "next_around_call() is deprecated, use next_call()",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.next_call(advised_request)


class DefaultCallAdvisorChain(CallAroundAdvisorChain):
    """
    Runs *advisors* in order, then *terminal*.

    Each ``next_call`` consumes one advisor, so a chain instance serves a
    single request.
    """

    def __init__(self, advisors: Sequence[Advisor], terminal: Terminal) -> None:
        self._advisors = list(advisors)
        self._terminal = terminal
        self._position = 0

    def next_call(self, request: AdvisedRequest) -> AdvisedResponse:
        if self._position < len(self._advisors):
            advisor = self._advisors[self._position]
            self._position += 1
            return advisor(request, self)
        return self._terminal(request)
