"""Prompt templates for Eisenhower Matrix analysis."""

from dataclasses import dataclass, field
from datetime import datetime

from .models import Language

# Both templates share one structure: instruction, schema, task, time, language rules,
# considerations, closing reminder. Placeholders: {text}, {current_time}
ENGLISH_PROMPT_TEMPLATE = """Analyze this task and categorize it using the Eisenhower Matrix. Respond ONLY with a valid JSON object in this exact format:

{{
  "quadrant": "urgent-important" | "not-urgent-important" | "urgent-not-important" | "not-urgent-not-important",
  "confidence": 0.8,
  "reasoning": "Brief explanation of why this task belongs in this quadrant",
  "suggestedDueDate": "2024-01-15" | null,
  "estimatedTime": 60,
  "tags": ["work", "meeting"],
  "priority": "high" | "medium" | "low"
}}

Task to analyze: "{text}"
Current time: {current_time}

IMPORTANT:
- MUST provide reasoning in the same language as the user input
- Use terminology appropriate to the input language in the analysis
- Do not use any language other than the user's input language

Rules:
- "quadrant" MUST be exactly one of: "urgent-important", "not-urgent-important", "urgent-not-important", "not-urgent-not-important"
- "confidence" is a number between 0.0 and 1.0
- "priority" MUST be exactly one of: "high", "medium", "low"
- Urgent = needs immediate attention, time-sensitive, deadline-driven
- Important = contributes to long-term goals, has significant impact
- Use keywords, context clues and timing to determine urgency and importance
- "estimatedTime" is in minutes
- Suggest a realistic due date (YYYY-MM-DD) only if time indicators are present
- Extract relevant tags from the content

Respond with ONLY the JSON object, no additional text. MUST provide reasoning in the same language as the user input."""

INDONESIAN_PROMPT_TEMPLATE = """Analisis tugas ini dan kategorikan menggunakan Matriks Eisenhower. Respons HANYA dengan objek JSON yang valid dalam format yang tepat ini:

{{
  "quadrant": "urgent-important" | "not-urgent-important" | "urgent-not-important" | "not-urgent-not-important",
  "confidence": 0.8,
  "reasoning": "Penjelasan singkat mengapa tugas ini termasuk dalam kuadran ini",
  "suggestedDueDate": "2024-01-15" | null,
  "estimatedTime": 60,
  "tags": ["kerja", "rapat"],
  "priority": "high" | "medium" | "low"
}}

Tugas yang akan dianalisis: "{text}"
Waktu saat ini: {current_time}

PENTING:
- WAJIB berikan reasoning dalam bahasa yang sama dengan bahasa input user
- Gunakan terminologi yang sesuai dengan bahasa input untuk menjelaskan analisis
- Jangan gunakan bahasa lain selain bahasa yang digunakan user

Aturan:
- "quadrant" WAJIB salah satu dari: "urgent-important", "not-urgent-important", "urgent-not-important", "not-urgent-not-important"
- "confidence" adalah angka antara 0.0 dan 1.0
- "priority" WAJIB salah satu dari: "high", "medium", "low"
- Urgent (Mendesak) = perlu perhatian segera, sensitif waktu, didorong deadline
- Important (Penting) = berkontribusi pada tujuan jangka panjang, memiliki dampak signifikan
- Gunakan kata kunci, petunjuk konteks, dan waktu untuk menentukan urgensi dan kepentingan
- "estimatedTime" dalam menit
- Sarankan tanggal jatuh tempo yang realistis (YYYY-MM-DD) hanya jika ada indikator waktu
- Ekstrak tag yang relevan dari konten

Respons HANYA dengan objek JSON, tanpa teks tambahan. WAJIB berikan reasoning dalam bahasa yang sama dengan input user."""

PROMPT_TEMPLATES = {
    Language.ENGLISH: ENGLISH_PROMPT_TEMPLATE,
    Language.INDONESIAN: INDONESIAN_PROMPT_TEMPLATE,
}

# Field names the model must echo back
RESPONSE_FIELDS = (
    "quadrant",
    "confidence",
    "reasoning",
    "suggestedDueDate",
    "estimatedTime",
    "tags",
    "priority",
)


@dataclass
class PromptContext:
    """Values rendered into the prompt besides the task text."""

    current_time: datetime = field(default_factory=datetime.now)


def build_prompt(
    text: str,
    context: PromptContext | None = None,
    language: Language = Language.ENGLISH,
) -> str:
    """
    Render the analysis prompt.

    Args:
        text: Raw task text, embedded literally
        context: Prompt context; current time defaults to now
        language: Template language

    Returns:
        Prompt string
    """
    context = context or PromptContext()
    template = PROMPT_TEMPLATES[language]
    return template.format(
        text=text.strip(),
        current_time=context.current_time.strftime("%Y-%m-%d %H:%M (%A)"),
    )
