"""All prompt templates for Gemini API calls.

User-supplied text is wrapped in XML tags so the model treats it as data,
never as instructions.
"""

from models.schemas.preferences import OptimizationPreferences, UserContext
from services.preference_prompt import (
    build_preference_prompt,
    get_candidate_type_guidance,
    get_job_type_verb_guidance,
)

MAX_SECTION_LENGTH = 1000
MAX_EXPERIENCE_LENGTH = 6000
MAX_JD_LENGTH = 3000
MAX_RESUME_LENGTH = 4000


def _truncate(text: str | None, limit: int) -> str:
    text = text or ""
    return text[:limit] if len(text) > limit else text


def _context_block(
    preferences: OptimizationPreferences | None,
    user_context: UserContext | None,
    candidate_type: str,
    section: str,
    keywords: list[str] | None,
    ats_context: str | None,
) -> str:
    """Preference, candidate-type, keyword and ATS blocks shared by every section."""
    parts = []
    preference_block = build_preference_prompt(preferences, user_context)
    if preference_block:
        parts.append(preference_block)
    guidance = get_candidate_type_guidance(candidate_type, section)
    if guidance:
        parts.append(f"**Candidate Guidance ({candidate_type}):** {guidance}")
    if keywords:
        parts.append(f"<extracted_keywords>\n{', '.join(keywords)}\n</extracted_keywords>")
    if ats_context:
        parts.append(f"<ats_context>\n{ats_context}\n</ats_context>")
    return "\n\n".join(parts)


def build_summary_prompt(
    summary_text: str,
    job_description: str,
    keywords: list[str] | None = None,
    preferences: OptimizationPreferences | None = None,
    user_context: UserContext | None = None,
    candidate_type: str = "fulltime",
    ats_context: str | None = None,
) -> str:
    context = _context_block(preferences, user_context, candidate_type, "summary", keywords, ats_context)

    return f"""You are a resume optimization expert specializing in professional summaries.

Optimize the professional summary below by incorporating relevant keywords from the job description.

<user_content>
{_truncate(summary_text, MAX_SECTION_LENGTH)}
</user_content>

<job_description>
{_truncate(job_description, MAX_JD_LENGTH)}
</job_description>

{context}

INSTRUCTIONS:
1. Identify the 2-3 job description keywords that best fit the existing summary
2. Reframe the summary to incorporate them naturally
3. ONLY reframe existing experience - NEVER fabricate skills, experiences, or qualifications
4. Keep it to 2-4 sentences (50-150 words) in the candidate's own voice
5. Avoid AI-sounding phrases such as "leverage my expertise", "synergize", "passionate about"

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "suggested": "<optimized summary text>",
  "keywords_added": [<keywords incorporated>],
  "explanation": "<one sentence on what changed and why>"
}}"""


def build_skills_prompt(
    skills_text: str,
    job_description: str,
    keywords: list[str] | None = None,
    preferences: OptimizationPreferences | None = None,
    user_context: UserContext | None = None,
    candidate_type: str = "fulltime",
    ats_context: str | None = None,
    resume_content: str | None = None,
) -> str:
    context = _context_block(preferences, user_context, candidate_type, "skills", keywords, ats_context)
    resume_block = ""
    if resume_content:
        resume_block = f"\n<resume_content>\n{_truncate(resume_content, MAX_RESUME_LENGTH)}\n</resume_content>\n"

    return f"""You are a resume optimization expert specializing in skills sections.

Analyze the skills section below and optimize it for the job description.

<user_content>
{_truncate(skills_text, MAX_SECTION_LENGTH)}
</user_content>

<job_description>
{_truncate(job_description, MAX_JD_LENGTH)}
</job_description>
{resume_block}
{context}

INSTRUCTIONS:
1. Extract every skill from the current skills section
2. Identify job description skills that match existing skills
3. Find job description skills that are missing but supported by the resume
4. Suggest additions only where the resume shows the experience
5. Flag skills that are less relevant for this role
6. Be specific with skill names (e.g., "React.js", not "front-end")

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "existing_skills": [<skills currently listed>],
  "matched_keywords": [<job description skills already present>],
  "missing_but_relevant": [{{"skill": "<name>", "reason": "<evidence from the resume>"}}],
  "skill_additions": [<skills to add>],
  "skill_removals": [{{"skill": "<name>", "reason": "<why it is lower priority>"}}],
  "summary": "<one or two sentences, e.g. 'You have 8/12 key skills.'>"
}}"""


def build_experience_prompt(
    experience_text: str,
    job_description: str,
    resume_content: str,
    keywords: list[str] | None = None,
    preferences: OptimizationPreferences | None = None,
    user_context: UserContext | None = None,
    candidate_type: str = "fulltime",
    ats_context: str | None = None,
    education: str | None = None,
) -> str:
    context = _context_block(preferences, user_context, candidate_type, "experience", keywords, ats_context)
    job_type = "coop" if candidate_type == "coop" else "fulltime"
    education_block = ""
    if education:
        education_block = f"\n<education>\n{_truncate(education, MAX_SECTION_LENGTH)}\n</education>\n"

    return f"""You are a resume optimization expert specializing in experience sections.

Optimize the experience bullets below by incorporating job description keywords and adding quantification where the context supports it.

<user_content>
{_truncate(experience_text, MAX_EXPERIENCE_LENGTH)}
</user_content>

<job_description>
{_truncate(job_description, MAX_JD_LENGTH)}
</job_description>

<resume_content>
{_truncate(resume_content, MAX_RESUME_LENGTH)}
</resume_content>
{education_block}
{context}

INSTRUCTIONS:
1. Extract each role with company, role, dates and bullets
2. Reframe each bullet to incorporate relevant keywords naturally
3. Add metrics only where they can be inferred from context - never invent numbers
4. {get_job_type_verb_guidance(job_type)}
5. Focus on achievements, not tasks

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "experience_entries": [
    {{
      "company": "<company>",
      "role": "<job title>",
      "dates": "<dates as written>",
      "original_bullets": [<original bullets>],
      "suggested_bullets": [
        {{
          "original": "<original bullet>",
          "suggested": "<improved bullet>",
          "metrics_added": [<metrics introduced>],
          "keywords_incorporated": [<keywords used>],
          "explanation": "<what changed>"
        }}
      ]
    }}
  ],
  "summary": "<e.g. 'Reframed 8 bullets across 3 roles, added metrics to 5.'>"
}}"""
