SCORING_SYSTEM = "You are an ATS-style resume evaluator. Output ONLY valid JSON. No markdown. No extra text."

COVER_LETTER_SYSTEM = (
    "You are an expert career writer. Write a high-impact cover letter that sounds human, "
    "specific, and confident. Avoid generic filler."
)


def scoring_prompt(resume_text: str, job_description: str) -> str:
    return f"""Job description:
{job_description}

Resume text:
{resume_text}

Rubric:
- skills max 40
- experience max 35
- projects max 15
- ats max 10
Total 100

Rules:
- Missing skills must come from the job description only.
- Evidence must be short verbatim quotes copied from the resume text.
- Bullet rewrites must not invent experience.

Return JSON exactly matching this schema:
{{
  "overallScore": number,
  "rubric": {{
    "skills": {{"score": number, "max": 40, "notes": string, "evidence": string[]}},
    "experience": {{"score": number, "max": 35, "notes": string, "evidence": string[]}},
    "projects": {{"score": number, "max": 15, "notes": string, "evidence": string[]}},
    "ats": {{"score": number, "max": 10, "notes": string, "evidence": string[]}}
  }},
  "missingSkills": {{"required": string[], "preferred": string[]}},
  "keywordCoverage": {{"coveragePct": number, "found": string[], "missing": string[]}},
  "topFixes": [{{"impact": "high"|"medium"|"low", "action": string, "example": string}}],
  "bulletRewrites": [{{"original": string, "rewrite": string, "why": string}}],
  "interviewPrep": {{"likelyQuestions": string[], "yourSTARPrompts": string[]}},
  "coverLetter": {{"draft": string}}
}}"""


def cover_letter_prompt(resume_text: str, job_description: str) -> str:
    return f"""Write a cover letter based ONLY on the provided resume and job description.

Rules:
- Do NOT invent experience, companies, tools, or metrics not clearly supported by the resume.
- If company name/role name is missing from the job description, use placeholders like [Company] and [Role].
- Keep it 250-380 words, 3-5 paragraphs, professional but energetic.
- Must include:
  1) Hook: 1-2 lines with the role + motivation + fit
  2) 2-3 short achievement bullets pulled from resume experience/projects (no invented metrics)
  3) Why this role/company: tie directly to job description requirements/keywords
  4) Closing: call to action + availability

Resume:
{resume_text}

Job Description:
{job_description}

Return ONLY the cover letter text (no JSON, no markdown, no title)."""
