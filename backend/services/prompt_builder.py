"""All prompt templates for Gemini API calls."""

import json

_RULES = """RULES:
- Extract ONLY what is stated in the text or clearly derivable from it. Do not invent data.
- Use null for unknown scalar values and [] for unknown lists.
- Salaries are yearly amounts in EUR as plain numbers; multiply monthly figures by 12."""


def build_job_parse_prompt(content: str) -> str:
    """Job posting from a URL or pasted text -> job profile."""
    return f"""You are an experienced HR analyst. Analyze this job posting and extract ALL available information.

{_RULES}
- If the company name cannot be found, use "Unknown".
- hiring_urgency: "hot" for "immediately"/"ASAP", "urgent" for "as soon as possible"/"at the earliest", otherwise "standard".
- remote_days: e.g. "2 days home office" -> 2, "mobile work possible" -> 1.
- benefits_extracted: list EVERY benefit mentioned, one per entry.

JOB POSTING:
---
{content}
---

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "title": "<job title>",
  "company_name": "<company>",
  "description": "<full role description>" | null,
  "requirements": "<candidate requirements>" | null,
  "location": "<city/region>" | null,
  "remote_type": "onsite" | "hybrid" | "remote" | null,
  "employment_type": "full-time" | "part-time" | "contract" | "freelance" | null,
  "experience_level": "junior" | "mid" | "senior" | "lead" | null,
  "salary_min": <number> | null,
  "salary_max": <number> | null,
  "skills": [<required technical skills>],
  "must_haves": [<must-have criteria>],
  "nice_to_haves": [<nice-to-have criteria>],
  "team_size": <integer> | null,
  "reports_to": "<manager/role>" | null,
  "core_hours": "<core working hours>" | null,
  "remote_days": <integer> | null,
  "daily_routine": "<typical day>" | null,
  "company_culture": "<tone, values, culture>" | null,
  "benefits_extracted": [<benefits>],
  "career_path": "<development opportunities>" | null,
  "hiring_urgency": "standard" | "urgent" | "hot" | null,
  "vacancy_reason": "<succession, growth, new team, ...>" | null,
  "hiring_deadline_weeks": <integer> | null,
  "industry": "<industry>" | null,
  "company_size_estimate": "<e.g. 51-200>" | null
}}"""


def build_document_parse_prompt(document_text: str) -> str:
    """Uploaded job description document -> document-shaped profile."""
    return f"""You are an expert at analyzing job descriptions. Analyze this job description document.

{_RULES}

DOCUMENT:
---
{document_text}
---

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "title": "<job title>",
  "company": "<company name>",
  "description": "<role description>",
  "requirements": [<requirements>],
  "nice_to_have": [<optional qualifications>],
  "technical_skills": [<technical skills>],
  "soft_skills": [<soft skills>],
  "experience_years_min": <number> | null,
  "experience_years_max": <number> | null,
  "salary_min": <number> | null,
  "salary_max": <number> | null,
  "location": "<location>",
  "remote_policy": "<onsite, hybrid or remote>",
  "employment_type": "<full-time, part-time, contract or freelance>",
  "benefits": [<benefits>],
  "company_culture": "<culture description>",
  "industry": "<industry>",
  "seniority_level": "<junior, mid, senior or lead>",
  "team_info": "<team description>"
}}"""


def build_enrichment_prompt(title: str, company_name: str, location: str | None, description: str | None) -> str:
    """Company classification from a job posting."""
    return f"""You are a company research expert. Analyze this job posting and classify the company.

Company: {company_name}
Title: {title}
Location: {location or 'Not specified'}
Description: {(description or '')[:1500]}

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "industry": "FinTech" | "HealthTech" | "E-Commerce" | "Automotive" | "Technology" | "EdTech" | "CleanTech" | "Consulting" | "Manufacturing" | "Media" | "Real Estate" | "Logistics" | "Other",
  "estimated_size": "1-50" | "51-200" | "201-500" | "501-1000" | "1000+",
  "funding_stage": "Bootstrapped" | "Seed" | "Series A" | "Series B" | "Series C+" | "Public" | "Unknown",
  "hiring_urgency": "ASAP" | "urgent" | "standard"
}}"""


def build_briefing_prompt(briefing_text: str, existing_data: dict | None = None) -> str:
    """Free-text hiring briefing -> intake data."""
    existing_context = ""
    if existing_data:
        existing_context = f"""
ALREADY KNOWN (do not override unless the briefing explicitly says otherwise):
{json.dumps(existing_data, indent=2, ensure_ascii=False)}
"""

    return f"""You are an experienced HR and recruiting consultant.
Extract structured intake data for a job posting from this free-text briefing.

{_RULES}
Pay particular attention to: team size and age structure, working hours (core hours,
home office, overtime), company culture, must-have and nice-to-have requirements,
timeline and urgency, budget, decision process.
{existing_context}
BRIEFING:
---
{briefing_text}
---

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "team_size": <integer> | null,
  "team_avg_age": "<e.g. 25-35>" | null,
  "core_hours": "<e.g. 10-16>" | null,
  "overtime_policy": "<policy>" | null,
  "remote_days": <integer> | null,
  "company_culture": "<culture>" | null,
  "career_path": "<development opportunities>" | null,
  "vacancy_reason": "<reason>" | null,
  "hiring_deadline_weeks": <integer> | null,
  "candidates_in_pipeline": <integer> | null,
  "decision_makers": [<people deciding>],
  "daily_routine": "<typical day>" | null,
  "must_have_criteria": [<must-haves>],
  "nice_to_have_criteria": [<nice-to-haves>],
  "hiring_urgency": "standard" | "urgent" | "hot" | null,
  "reports_to": "<role>" | null,
  "salary_min": <integer> | null,
  "salary_max": <integer> | null
}}"""
