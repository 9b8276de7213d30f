# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Wiring errors: raised while the ApplicationContext builds its beans."""

from __future__ import annotations

from orion.kernel.exceptions import InfrastructureException


class BeanCreationException(InfrastructureException):
    """A bean could not be built, so the application cannot start.

    Attributes:
        subsystem: Area being wired (``"session"``, ``"resolution"``, ``"startup"``).
        provider: The implementation or configuration value involved.
        reason: What went wrong.
    """

    def __init__(self, subsystem: str, provider: str, reason: str) -> None:
        self.subsystem = subsystem
        self.provider = provider
        self.reason = reason
        super().__init__(
            f"Failed to configure {subsystem} with provider '{provider}': {reason}",
            code=f"BEAN_CREATION_{subsystem.upper()}",
        )


class NoSuchBeanError(BeanCreationException):
    """Nothing is registered for the requested type or name."""

    def __init__(
        self,
        *,
        bean_type: type | None = None,
        bean_name: str | None = None,
        required_by: str | None = None,
        parameter: str | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        self.bean_type = bean_type
        self.bean_name = bean_name
        self.required_by = required_by
        self.parameter = parameter
        self.suggestions = suggestions or []

        if bean_type is not None:
            headline = f"No bean of type '{getattr(bean_type, '__name__', bean_type)}' is registered"
        elif bean_name:
            headline = f"No bean named '{bean_name}' is registered"
        else:
            headline = "No matching bean is registered"
        super().__init__(subsystem="resolution", provider=required_by or "container", reason=headline)

        details = [headline]
        if required_by:
            details.append(f"required by {required_by}")
        if parameter:
            details.append(f"for parameter '{parameter}'")
        message = ", ".join(details)
        if self.suggestions:
            message += f" (did you mean: {', '.join(self.suggestions)}?)"
        self.args = (message,)


class NoUniqueBeanError(BeanCreationException):
    """Several registered classes implement the requested type."""

    def __init__(self, *, bean_type: type, candidates: list[type]) -> None:
        self.bean_type = bean_type
        self.candidates = candidates
        names = ", ".join(c.__name__ for c in candidates)
        super().__init__(
            subsystem="resolution",
            provider="container",
            reason=f"{len(candidates)} beans of type '{bean_type.__name__}' ({names}), register only one",
        )


class BeanCurrentlyInCreationError(BeanCreationException):
    """Circular dependency. ``chain`` lists the types in resolution order."""

    def __init__(self, *, chain: list[type], current: type) -> None:
        self.chain = chain
        self.current = current
        path = " -> ".join(t.__name__ for t in [*chain, current])
        super().__init__(subsystem="resolution", provider=current.__name__, reason=f"Circular dependency: {path}")
