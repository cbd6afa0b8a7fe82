"""Thin wrapper around the OpenAI Responses API."""

from __future__ import annotations

import base64
from pathlib import Path
from typing import Any, Dict, List, Optional

from openai import OpenAI

from refextract.config import settings


class OpenAIChatClient:
    """Lazily initializes the OpenAI Python SDK."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
    ) -> None:
        api_key = api_key or settings.openai_api_key
        if not api_key:
            raise ValueError("OPENAI_API_KEY is not configured in the environment.")
        self.model = model or settings.openai_model_normalize
        self.client = OpenAI(api_key=api_key, base_url=base_url or settings.openai_base_url)

    def complete_json(
        self,
        system_prompt: str,
        user_prompt: str,
        schema: Dict[str, Any],
        schema_name: str = "ReferenceEnvelope",
    ) -> str:
        """Ask for a JSON document shaped by ``schema`` and return the raw text."""
        content = [{"type": "input_text", "text": user_prompt}]
        return self._create(system_prompt, content, schema, schema_name)

    def complete_file_json(
        self,
        system_prompt: str,
        user_prompt: str,
        pdf_path: Path,
        schema: Dict[str, Any],
        schema_name: str = "references",
    ) -> str:
        """Same as :meth:`complete_json` with the PDF attached as an input file."""
        encoded = base64.b64encode(Path(pdf_path).read_bytes()).decode("ascii")
        content = [
            {
                "type": "input_file",
                "filename": Path(pdf_path).name,
                "file_data": f"data:application/pdf;base64,{encoded}",
            },
            {"type": "input_text", "text": user_prompt},
        ]
        return self._create(system_prompt, content, schema, schema_name)

    def _create(
        self,
        system_prompt: str,
        content: List[Dict[str, Any]],
        schema: Dict[str, Any],
        schema_name: str,
    ) -> str:
        response = self.client.responses.create(
            model=self.model,
            instructions=system_prompt,
            max_output_tokens=settings.max_output_tokens,
            input=[{"role": "user", "content": content}],
            text={
                "format": {
                    "type": "json_schema",
                    "name": schema_name,
                    "schema": schema,
                    "strict": False,
                }
            },
        )
        return self._extract_text(response)

    @staticmethod
    def _extract_text(response) -> str:
        chunks: list[str] = []
        for item in response.output or []:
            for content in getattr(item, "content", None) or []:
                content_type = getattr(content, "type", None)
                content_text = getattr(content, "text", None)
                if isinstance(content, dict):
                    content_type = content.get("type", content_type)
                    content_text = content.get("text", content_text)
                if content_type in {"output_text", "text"} and content_text:
                    chunks.append(str(content_text))
        return "\n".join(part.strip() for part in chunks if part).strip()
