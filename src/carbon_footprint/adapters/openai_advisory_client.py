"""OpenAI Responses API client for supplementary advice."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from carbon_footprint.services.advisory import AdvisoryClient, payload_text


@dataclass
class OpenAIAdvisoryClient(AdvisoryClient):
    """Advisory client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIAdvisoryClient":
        """Create an OpenAI advisory client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def advise(
        self, *, model: str, instructions: str, payload: dict[str, object]
    ) -> str:
        """Call OpenAI Responses API with the footprint as input."""
        response = await self.client.responses.create(
            model=model,
            instructions=instructions,
            input=payload_text(payload),
            store=False,
        )
        return response.output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
