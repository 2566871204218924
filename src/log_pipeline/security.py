"""
Security context providers

Handlers ask the installed provider for a security context and run their
output inside it. The default provider does nothing; applications that need
to switch identity around log output install their own provider through a
SecurityContextProviderHook.
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any


class SecurityContext:
    """Credentials a handler can run under while writing"""

    @contextmanager
    def impersonate(self, state: Any = None) -> Generator[None, None, None]:
        """Run the block under this context's credentials"""
        yield


class NullSecurityContext(SecurityContext):
    """Runs the block unchanged"""

    pass


NULL_SECURITY_CONTEXT = NullSecurityContext()


class SecurityContextProvider:
    """Hands out security contexts to handlers"""

    def create_security_context(self, consumer: Any) -> SecurityContext:
        return NULL_SECURITY_CONTEXT
