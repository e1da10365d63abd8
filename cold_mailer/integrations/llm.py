"""
Claude-backed job extraction and email drafting.

Both collaborators send a single prompt through the Anthropic messages API
and treat the answer as untrusted text: the extractor only promises a
mapping, and the drafter returns whatever prose the model wrote.
"""

from typing import Optional
import json
import logging
import re

import anthropic

from .base import EmailDrafter, JobExtractor
from cold_mailer.core.exceptions import DraftError, ExtractionError
from cold_mailer.core.models import JobRecord, RawJobData


DEFAULT_MODEL = "claude-sonnet-4-20250514"

EXTRACTION_PROMPT = """### SCRAPED TEXT FROM WEBSITE:
{page_data}

### INSTRUCTION:
The scraped text is from the careers page of a website.
Your job is to extract the job posting and return it in JSON format containing the
following keys: `role`, `experience`, `skills` and `description`.
The `skills` should be an array of strings.
Only return the valid JSON.

### VALID JSON (NO PREAMBLE):"""

EMAIL_PROMPT = """### JOB DESCRIPTION:
Role: {role}
Experience Required: {experience}
Skills Required: {skills}
Description: {description}

### INSTRUCTION:
You are {sender_name}. {sender_summary}
Your contact email is {requester_email}.

Write a professional cold email for the specific job role mentioned above.
- If it's a technical/development role, emphasize your technical skills
- If it's a non-technical role (like HR, Admin, etc.), focus on your analytical skills,
  problem-solving abilities, communication skills, and adaptability
- Always be honest about your background but highlight relevant transferable skills
- Customize your response based on the actual job requirements

Include relevant portfolio links if they match the job requirements: {link_list}

Make the email personalized to the specific role and requirements mentioned in the job description.
Do not provide a preamble.

### EMAIL (NO PREAMBLE):"""

CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class ClaudeClient:
    """Thin wrapper around anthropic.Anthropic for single-prompt completions."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = DEFAULT_MODEL,
        max_tokens: int = 1500,
        temperature: float = 0.0,
        timeout: float = 60,
        client: Optional[anthropic.Anthropic] = None,
    ):
        self.model = model or DEFAULT_MODEL
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.api_key = api_key
        self.timeout = timeout
        self._client = client
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def client(self) -> anthropic.Anthropic:
        # Created on first use so the service can start without a key.
        if self._client is None:
            self._client = anthropic.Anthropic(
                api_key=self.api_key,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    def complete(self, prompt: str) -> str:
        response = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            messages=[{"role": "user", "content": prompt}],
        )

        return "".join(
            block.text for block in response.content if getattr(block, "type", "text") == "text"
        )


class ClaudeJobExtractor(JobExtractor):
    """Extracts job attributes from page text with Claude."""

    def __init__(self, client: ClaudeClient, max_input_chars: int = 20000):
        super().__init__()
        self.client = client
        self.max_input_chars = max_input_chars

    def extract(self, text: str) -> RawJobData:
        self.logger.info(f"Extracting job info from text length: {len(text)}")

        prompt = EXTRACTION_PROMPT.format(page_data=text[:self.max_input_chars])

        try:
            content = self.client.complete(prompt)
        except anthropic.AnthropicError as e:
            self.logger.error(f"Error extracting jobs: {e}")
            raise ExtractionError(f"Job extraction failed: {e}") from e

        self.logger.debug(f"AI response: {content}")
        return self.parse_response(content)

    def parse_response(self, content: str) -> RawJobData:
        """
        Parse the model answer into a single job mapping.

        A JSON array yields its first element. Anything that is not a JSON
        object raises ExtractionError.
        """
        cleaned = CODE_FENCE.sub("", (content or "").strip())

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError:
            parsed = self._parse_embedded_json(cleaned)

        if isinstance(parsed, list):
            parsed = parsed[0] if parsed else None

        if not isinstance(parsed, dict):
            self.logger.error(f"Unparseable extraction output: {cleaned[:200]!r}")
            raise ExtractionError("Context too big. Unable to parse jobs.")

        return parsed

    @staticmethod
    def _parse_embedded_json(text: str):
        """Pull the outermost JSON object or array out of surrounding prose."""
        starts = [i for i in (text.find("{"), text.find("[")) if i != -1]
        if not starts:
            return None

        start = min(starts)
        end = text.rfind("}" if text[start] == "{" else "]")
        if end <= start:
            return None

        try:
            return json.loads(text[start:end + 1])
        except json.JSONDecodeError:
            return None


class ClaudeEmailDrafter(EmailDrafter):
    """Drafts the cold email with Claude."""

    def __init__(self, client: ClaudeClient, sender_name: str = "", sender_summary: str = ""):
        super().__init__()
        self.client = client
        self.sender_name = sender_name or "a software developer"
        self.sender_summary = sender_summary

    def draft(self, job_record: JobRecord, link_list: str, requester_email: str) -> str:
        prompt = self.build_prompt(job_record, link_list, requester_email)

        try:
            email = self.client.complete(prompt)
        except anthropic.AnthropicError as e:
            self.logger.error(f"Error writing email: {e}")
            raise DraftError(f"Email drafting failed: {e}") from e

        return email.strip()

    def build_prompt(self, job_record: JobRecord, link_list: str, requester_email: str) -> str:
        return EMAIL_PROMPT.format(
            role=job_record.role.strip() or "Not specified",
            experience=job_record.experience.strip() or "Not specified",
            skills=", ".join(job_record.skills) or "Not specified",
            description=job_record.description.strip() or "Not specified",
            sender_name=self.sender_name,
            sender_summary=self.sender_summary,
            requester_email=requester_email,
            link_list=link_list or "None available",
        )
