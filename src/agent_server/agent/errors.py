"""Exceptions raised by the agent turn loop."""


class AgentError(Exception):
    """Base class for errors that fail a chat request."""


class ModelUnavailableError(AgentError):
    """The model service could not produce a response."""


class MaxIterationsError(AgentError):
    """The turn loop reached its iteration cap without a final answer."""

    def __init__(self, max_iterations: int) -> None:
        super().__init__(f"Max iterations reached ({max_iterations})")
        self.max_iterations = max_iterations


class ToolNotFoundError(Exception):
    """The model requested a tool that is not registered.

    Never fails a chat request: the turn loop reports it to the model as
    the tool result.
    """

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"tool not found: {tool_name}")
        self.tool_name = tool_name
