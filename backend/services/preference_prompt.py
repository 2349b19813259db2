"""Render optimization preferences and user context as an LLM instruction block.

The phrase tables below are read verbatim by the section prompts; every
preference dimension is rendered on its own, with no precedence between them.
"""

from models.schemas.preferences import OptimizationPreferences, UserContext

# ---------------------------------------------------------------------------
# Lookup tables
# ---------------------------------------------------------------------------

TONE_GUIDANCE = {
    "professional": "Use a professional, corporate tone with polished, formal language.",
    "casual": "Use a conversational, approachable tone while staying professional.",
    "technical": "Use a technical tone that emphasizes technical depth: name specific tools, frameworks and technologies.",
}

VERBOSITY_GUIDANCE = {
    "concise": "Keep it concise: 1-2 lines per bullet, no filler words.",
    "detailed": "Be detailed: 2-3 lines per bullet with context and results.",
    "comprehensive": "Be comprehensive: 3-4 lines per bullet covering context, actions and outcomes.",
}

EMPHASIS_GUIDANCE = {
    "keywords": "Prioritize ATS keyword coverage: work job description terms in naturally.",
    "skills": "Prioritize technical skills and the tools used to apply them.",
    "impact": "Prioritize measurable impact: results, metrics and business outcomes.",
}

INDUSTRY_GUIDANCE = {
    "tech": "Frame content for the technology industry: APIs, databases, scalability, shipping software.",
    "finance": "Frame content for the finance industry: risk, compliance, accuracy, financial outcomes.",
    "healthcare": "Frame content for healthcare: patient outcomes, regulatory compliance, clinical quality.",
    "education": "Frame content for education: learning outcomes, curriculum, student success.",
    "retail": "Frame content for retail: customer experience, sales growth, inventory and operations.",
    "manufacturing": "Frame content for manufacturing: process efficiency, quality control, safety.",
    "consulting": "Frame content for consulting: client outcomes, stakeholder management, recommendations.",
    "government": "Frame content for government: public service, policy, accountability, procurement rules.",
    "generic": "Use industry-neutral language that transfers across sectors.",
}

EXPERIENCE_LEVEL_GUIDANCE = {
    "entry": "Write for an entry-level candidate: highlight potential, coursework, projects and fast learning.",
    "mid": "Write for a mid-level candidate: highlight independent ownership and proven delivery.",
    "senior": "Write for a senior-level candidate: highlight strategy, mentorship and organizational impact.",
}

JOB_TYPE_GUIDANCE = {
    "coop": (
        "Target a co-op/internship position. Use learning-focused language such as "
        '"Contributed to", "Developed", "Learned", "Gained experience". '
        "Emphasize growth, development and eagerness to learn."
    ),
    "fulltime": (
        "Target a full-time career position. Use impact-focused language such as "
        '"Led", "Drove", "Owned", "Delivered". '
        "Emphasize delivery, ownership and business results."
    ),
}

MODIFICATION_LEVEL_GUIDANCE = {
    "conservative": (
        "CONSERVATIVE (15-25% change): Preserve the original wording where possible. "
        "Only add keywords and make minimal restructuring."
    ),
    "moderate": (
        "MODERATE (35-50% change): Restructure for impact while preserving intent. "
        "Balance improvements with authenticity."
    ),
    "aggressive": (
        "AGGRESSIVE (60-75% change): Full rewrite for maximum impact. "
        "Significant reorganization is allowed; aim for transformation, not polish."
    ),
}

CAREER_GOAL_GUIDANCE = {
    "first-job": "The candidate is seeking their first job: emphasize education, projects and potential.",
    "switching-careers": (
        "The candidate is transitioning to a new career: highlight transferable skills "
        "and connect past experience to the new field."
    ),
    "advancing": "The candidate is advancing in their current field: show growing scope and responsibility.",
    "promotion": "The candidate is seeking a promotion: emphasize leadership readiness and results at the next level.",
    "returning": "The candidate is returning to the workforce: show current skills and frame the gap constructively.",
}

_SECTIONS = (
    ("Tone", "tone", TONE_GUIDANCE),
    ("Verbosity", "verbosity", VERBOSITY_GUIDANCE),
    ("Emphasis", "emphasis", EMPHASIS_GUIDANCE),
    ("Industry", "industry", INDUSTRY_GUIDANCE),
    ("Experience Level", "experience_level", EXPERIENCE_LEVEL_GUIDANCE),
    ("Job Type", "job_type", JOB_TYPE_GUIDANCE),
    ("Modification Level", "modification_level", MODIFICATION_LEVEL_GUIDANCE),
)


def _user_context_lines(user_context: UserContext | None) -> list[str]:
    if user_context is None or user_context.is_empty():
        return []
    lines = []
    if user_context.career_goal:
        lines.append(f"**Career Goal:** {CAREER_GOAL_GUIDANCE[user_context.career_goal]}")
    industries = [i.strip().title() for i in user_context.target_industries if i.strip()]
    if industries:
        lines.append(f"**Target Industries:** {', '.join(industries)}")
    return lines


def build_preference_prompt(
    prefs: OptimizationPreferences | None, user_context: UserContext | None = None
) -> str:
    """Instruction block for the given preferences.

    ``prefs=None`` means "no preferences": the block is omitted and only a
    non-empty user context is rendered.
    """
    context_lines = _user_context_lines(user_context)
    if prefs is None:
        return "\n".join(context_lines)

    lines = ["**User Preferences:**", ""]
    for label, field, table in _SECTIONS:
        lines.append(f"**{label}:** {table[getattr(prefs, field)]}")
    if context_lines:
        lines.append("")
        lines.extend(context_lines)
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Candidate-type guidance
# ---------------------------------------------------------------------------

def derive_candidate_type(prefs: OptimizationPreferences | None) -> str:
    if prefs is not None and prefs.job_type == "coop":
        return "coop"
    return "fulltime"


CANDIDATE_TYPE_GUIDANCE: dict[str, dict[str, str]] = {
    "coop": {
        "summary": "Co-op candidates can remove or skip the summary; keep any summary to one or two lines about what they want to learn.",
        "skills": "Show breadth: list languages, frameworks and tools from coursework and projects.",
        "experience": "Frame work terms around learning and contribution; part-time and volunteer roles count.",
        "education": "Education is the primary credential: lead with relevant coursework, GPA and academic projects.",
        "projects": "Projects are a primary section: show what was built, with which stack, and the outcome.",
    },
    "career_changer": {
        "summary": "Use the summary as a bridge: state the transition and lead with transferable strengths.",
        "skills": "Lead with transferable skills, then skills from the new field.",
        "experience": "Reframe past roles to bridge the gap: surface results that carry into the new-career role.",
        "education": "Recent training for the new field is a primary signal: certifications, bootcamps, degrees.",
        "projects": "Projects prove the pivot: show hands-on work in the new field.",
    },
    "fulltime": {
        "summary": "Write a tailored summary that mirrors the role's core requirements.",
        "skills": "Show proficiency: lead with the skills the role requires, grouped by category.",
        "experience": "Experience is the core section: quantify impact and lead every bullet with a strong verb.",
        "education": "Education is supporting: keep it to degree, school and dates unless recent.",
        "projects": "Keep projects concise and only include those relevant to the role.",
    },
}


def get_candidate_type_guidance(candidate_type: str, section: str) -> str:
    guidance = CANDIDATE_TYPE_GUIDANCE.get(candidate_type, CANDIDATE_TYPE_GUIDANCE["fulltime"])
    return guidance.get(section, "")


def get_job_type_verb_guidance(job_type: str) -> str:
    """Action-verb instruction for bullets of the given job type."""
    if job_type == "coop":
        return (
            'Use learning-focused verbs: "Contributed to", "Developed", "Learned", '
            '"Gained experience", "Collaborated on".'
        )
    return 'Use impact-focused verbs: "Led", "Drove", "Owned", "Delivered", "Built".'
