"""Prompts for section compression, buffer compression and paper analysis."""

from condenser.models import SectionType

_SECTION_BASE_INSTRUCTIONS = """\
You are an expert at condensing academic papers. Compress the paper section
below, keeping the most important information.

Requirements:
- Target length: about {target_tokens} tokens.
- Section type: {section_type}.
- Importance: {importance_pct}%.
- Keep core claims, key data and important conclusions.
- Drop redundant description, long examples and minor detail.
- Keep the academic wording accurate.
"""

_SECTION_STRATEGIES: dict[SectionType, str] = {
    SectionType.METHOD: "- Keep the core algorithm, the key steps and what is novel.",
    SectionType.EXPERIMENT: "- Keep the experimental setup, main results and key findings.",
    SectionType.ABSTRACT: "- Keep the original wording wherever possible; cut only the most redundant parts.",
    SectionType.CONCLUSION: "- Keep the original wording wherever possible; cut only the most redundant parts.",
    SectionType.RELATED_WORK: "- Keep only the most relevant prior work and comparisons.",
    SectionType.APPENDIX: "- Keep only the most essential supplementary information.",
}

_OUTPUT_RULE = "\nOutput ONLY the compressed text. No explanations or meta-commentary."

BUFFER_TASK = "Compress the accumulated paper content below, keeping only the most essential information."

_BUFFER_INSTRUCTIONS = """\
You are an expert at condensing academic papers. {task}

Requirements:
- Target length: about {target_tokens} tokens.
- Keep core claims, key methods and important conclusions.
- Drop redundant description, repeated information and minor detail.
- Keep the text coherent and academically accurate.
- Keep the "## " section headings.
"""

ANALYSIS_SYSTEM_PROMPT = """\
You are a rigorous research assistant writing an in-depth analysis of a single paper.

Rules:
- Base every statement strictly on the paper text. Do not add anything the paper does not say.
- Stay focused on this paper's own contribution.
- Be objective and precise.

Cover:
- Background and motivation
- Core methodology
- Experimental design and results
- Main contributions compared with prior work
- Limitations
- Future work mentioned by the authors

Output Markdown with clear headings and bullet points.
"""


def build_section_system_prompt(
    section_type: SectionType, target_tokens: int, importance: float
) -> str:
    """Build the system prompt for compressing one section."""
    prompt = _SECTION_BASE_INSTRUCTIONS.format(
        target_tokens=target_tokens,
        section_type=section_type.value,
        importance_pct=round(importance * 100),
    )
    strategy = _SECTION_STRATEGIES.get(section_type)
    if strategy:
        prompt += "\nStrategy:\n" + strategy + "\n"
    return prompt + _OUTPUT_RULE


def build_section_user_prompt(title: str, content: str) -> str:
    """Build the user message carrying the section text."""
    return f"Compress the following section ({title}):\n\n{content}"


def build_buffer_system_prompt(target_tokens: int) -> str:
    """Build the system prompt for re-compressing the accumulated buffer."""
    return _BUFFER_INSTRUCTIONS.format(task=BUFFER_TASK, target_tokens=target_tokens) + _OUTPUT_RULE


def build_analysis_prompt(doc_id: str, text: str) -> str:
    """Build the user message asking for a single-paper analysis."""
    return (
        f"Analyse the following paper ({doc_id}):\n\n"
        f"---\n{text}\n---\n\n"
        f"Follow the structure from the instructions and answer in Markdown."
    )
