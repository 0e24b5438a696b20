from abc import ABC, abstractmethod


class BaseClassificationClient(ABC):
    """A chat model that answers one prompt with JSON matching a schema.

    Implementations make a single blocking call; the caller owns the deadline.
    """

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        """Return the raw message text, which may be empty or not valid JSON."""
