"""
Resume Analyzer Backend
Analyzes resumes using heuristic scoring based on:
- Keyword density (25%)
- Action verbs (20%)
- Quantifiable results (25%)
- Formatting (15%)
- Contact & Summary (15%)

When a Hugging Face API key is configured, the hosted models are used
instead (summarization, zero-shot section/skill classification, sentiment).
"""
import math
import re
from pathlib import Path
from typing import Optional

from .config import TECH_KEYWORDS, ACTION_VERBS, RESUME_WEIGHTS, RESUME_SECTIONS
from .utils.pdf_parser import extract_text_from_pdf
from .utils.docx_parser import extract_text_from_docx

SECTION_LABELS = [
    "work experience",
    "education",
    "technical skills",
    "projects",
    "certifications",
]

SKILL_LABELS = [
    "programming",
    "leadership",
    "communication",
    "problem solving",
    "teamwork",
]

WORDS_PER_MINUTE = 200


def extract_text(file_path: str) -> str:
    """Extract text from PDF, DOCX, or TXT file."""
    path = Path(file_path)

    if not path.exists():
        return f"[ERROR] File not found: {file_path}"

    suffix = path.suffix.lower()

    if suffix == ".pdf":
        return extract_text_from_pdf(file_path)
    elif suffix == ".docx":
        return extract_text_from_docx(file_path)
    elif suffix in [".txt", ".md", ""]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except Exception as e:
            return f"[ERROR] Failed to read TXT: {e}"
    else:
        return f"[ERROR] Unsupported file format: {suffix}. Supported: PDF, DOCX, TXT"


def extract_text_from_upload(filename: str, data: bytes) -> str:
    """Extract text from an uploaded file's bytes, dispatching on extension."""
    suffix = Path(filename or "").suffix.lower()

    if suffix == ".pdf":
        return extract_text_from_pdf(data)
    if suffix == ".docx":
        return extract_text_from_docx(data)
    return data.decode("utf-8", errors="ignore")


def word_count(text: str) -> int:
    return len(text.split())


def estimated_read_time(text: str) -> str:
    return f"{math.ceil(word_count(text) / WORDS_PER_MINUTE)} minutes"


def score_keywords(text: str) -> tuple[float, list[str]]:
    """Score based on industry keyword density."""
    text_lower = text.lower()
    found_keywords = []

    for keyword in TECH_KEYWORDS:
        if re.search(rf"(?<![\w+]){re.escape(keyword)}(?![\w+])", text_lower):
            found_keywords.append(keyword)

    # 12 keywords = perfect score
    score = min(len(found_keywords) / 12, 1.0) * 100
    return score, found_keywords


def score_action_verbs(text: str) -> tuple[float, list[str]]:
    """Score based on action verb usage."""
    text_lower = text.lower()
    found_verbs = []

    for verb in ACTION_VERBS:
        if re.search(rf"\b{verb}\b", text_lower):
            found_verbs.append(verb)

    # 10 verbs = perfect score
    score = min(len(found_verbs) / 10, 1.0) * 100
    return score, found_verbs


def score_quantifiable(text: str) -> tuple[float, list[str]]:
    """Score based on quantifiable achievements (numbers, percentages, metrics)."""
    patterns = [
        r"\d+%",  # Percentages
        r"\$[\d,]+",  # Dollar amounts
        r"\d+x\b",  # Multipliers (2x, 10x)
        r"\d+\+",  # Plus numbers (100+ users)
        r"increased[^\n]*?\d+",
        r"reduced[^\n]*?\d+",
        r"improved[^\n]*?\d+",
        r"\d+\s*(?:users|customers|clients|projects|teams)",
    ]

    found_metrics = []
    for pattern in patterns:
        matches = re.findall(pattern, text.lower())
        found_metrics.extend(matches[:3])  # Cap at 3 per pattern

    # 5 metrics = perfect score
    score = min(len(found_metrics) / 5, 1.0) * 100
    return score, found_metrics[:10]


def find_sections(text: str) -> list[str]:
    text_lower = text.lower()
    return [section for section in RESUME_SECTIONS if section in text_lower]


def score_formatting(text: str) -> tuple[float, list[str]]:
    """Score based on resume structure and formatting."""
    strengths = []
    score = 0

    found_sections = find_sections(text)
    for section in found_sections:
        strengths.append(f"Has {section} section")

    # Section score (max 50 points)
    score += min(len(found_sections) / 4, 1.0) * 50

    # Length check (max 25 points)
    words = word_count(text)
    if 300 <= words <= 800:
        score += 25
        strengths.append("Good length (300-800 words)")
    elif 200 <= words <= 1000:
        score += 15
        strengths.append("Acceptable length")

    # Bullet points / structure (max 25 points)
    bullet_count = len(re.findall(r"^\s*[•\-*]", text, re.MULTILINE))
    if bullet_count >= 5:
        score += 25
        strengths.append("Good use of bullet points")
    elif bullet_count >= 2:
        score += 15
        strengths.append("Some bullet points")

    return score, strengths


def score_contact(text: str) -> tuple[float, list[str]]:
    """Score based on contact information."""
    strengths = []
    score = 0

    if re.search(r"[\w.-]+@[\w.-]+\.\w+", text):
        score += 25
        strengths.append("Has email address")

    if re.search(r"\+?\(?\d[\d\-\(\)\s]{8,}\d", text):
        score += 25
        strengths.append("Has phone number")

    if "linkedin" in text.lower():
        score += 25
        strengths.append("Has LinkedIn profile")

    if re.search(r"github|gitlab|portfolio|https?://", text.lower()):
        score += 25
        strengths.append("Links to portfolio or code")

    return score, strengths


def has_summary(text: str) -> bool:
    return any(
        word in text.lower()
        for word in ["summary", "objective", "profile", "about me"]
    )


def score_education(text: str) -> float:
    text_lower = text.lower()
    has_header = "education" in text_lower
    has_degree = bool(re.search(
        r"bachelor|master|b\.?s\.?c?\b|m\.?s\.?c?\b|ph\.?d|university|college|degree",
        text_lower,
    ))
    if has_header and has_degree:
        return 95
    if has_header or has_degree:
        return 60
    return 20


def _feedback(score: float, good: str, weak: str) -> str:
    return good if score >= 70 else weak


def analyze_resume_text(text: str) -> dict:
    """
    Analyze resume text with the heuristic scorer.

    Returns:
        dict with overallScore, per-section scores, keywords, suggestions,
        ATS compatibility and reading stats
    """
    keyword_score, found_keywords = score_keywords(text)
    verb_score, found_verbs = score_action_verbs(text)
    quant_score, found_metrics = score_quantifiable(text)
    format_score, format_strengths = score_formatting(text)
    contact_score, contact_strengths = score_contact(text)

    summary_present = has_summary(text)
    summary_score = (70 if summary_present else 20) + (30 if quant_score >= 60 else 0)
    contact_summary_score = (contact_score + (100 if summary_present else 0)) / 2

    experience_score = (verb_score + quant_score) / 2
    if not re.search(r"experience|work history|employment", text.lower()):
        experience_score = min(experience_score, 40)

    education_score = score_education(text)

    # Weighted final score
    final_score = (
        keyword_score * RESUME_WEIGHTS["keyword_density"]
        + verb_score * RESUME_WEIGHTS["action_verbs"]
        + quant_score * RESUME_WEIGHTS["quantifiable_results"]
        + format_score * RESUME_WEIGHTS["formatting"]
        + contact_summary_score * RESUME_WEIGHTS["contact_summary"]
    )

    sections = {
        "contact": {
            "score": round(contact_score),
            "feedback": _feedback(
                contact_score,
                "Contact information is complete and professional.",
                "Add missing contact details (email, phone, LinkedIn, portfolio link).",
            ),
        },
        "summary": {
            "score": round(summary_score),
            "feedback": (
                "Professional summary is present and backed by results."
                if summary_score >= 90 else
                "Consider adding more specific achievements and quantifiable results."
                if summary_present else
                "Add a professional summary section."
            ),
        },
        "experience": {
            "score": round(experience_score),
            "feedback": _feedback(
                experience_score,
                "Good experience section with strong verbs and metrics.",
                "Add more action verbs and metrics to your experience.",
            ),
        },
        "education": {
            "score": round(education_score),
            "feedback": _feedback(
                education_score,
                "Education section is well-formatted.",
                "Add an education section with your degree and institution.",
            ),
        },
        "skills": {
            "score": round(keyword_score),
            "feedback": _feedback(
                keyword_score,
                "Strong coverage of in-demand technical skills.",
                "Consider organizing skills by category and adding proficiency levels.",
            ),
        },
    }

    missing_keywords = [kw for kw in TECH_KEYWORDS if kw not in found_keywords]

    suggestions = []
    if quant_score < 70:
        suggestions.append("Add quantifiable achievements (e.g., 'Increased performance by 40%')")
    if verb_score < 70:
        missing_verbs = [verb for verb in ACTION_VERBS if verb not in found_verbs][:5]
        suggestions.append(f"Use more action verbs at the start of bullet points, like: {', '.join(missing_verbs)}")
    if keyword_score < 70:
        suggestions.append(f"Consider adding keywords: {', '.join(missing_keywords[:5])}")
    if not summary_present:
        suggestions.append("Add a professional summary section")
    if contact_score < 100:
        suggestions.append("Include links to portfolio or GitHub")
    if format_score < 50:
        suggestions.append("Optimize for ATS by using standard section headings")

    ats_issues = []
    found_sections = find_sections(text)
    if len(found_sections) < 3:
        ats_issues.append("Some section headers may not be recognized by ATS")
    if "|" in text or "\t" in text:
        ats_issues.append("Consider using a simpler format for better ATS parsing")
    words = word_count(text)
    if words < 200:
        ats_issues.append("Resume is short - ATS ranking favors more detailed content")
    elif words > 1000:
        ats_issues.append("Resume is long - consider trimming to the most relevant content")

    strengths = []
    if keyword_score >= 60:
        strengths.append(f"Strong technical keywords ({len(found_keywords)} found)")
    if verb_score >= 60:
        strengths.append(f"Good use of action verbs ({len(found_verbs)} found)")
    if quant_score >= 60:
        strengths.append("Includes quantifiable achievements")
    strengths.extend(format_strengths)
    strengths.extend(contact_strengths)

    return {
        "overallScore": round(final_score),
        "sections": sections,
        "keywords": {
            "found": found_keywords[:10],
            "missing": missing_keywords[:5],
        },
        "strengths": strengths[:5],
        "suggestions": suggestions[:6],
        "atsCompatibility": {
            "score": round(format_score),
            "issues": ats_issues,
        },
        "metrics": found_metrics[:5],
        "wordCount": words,
        "estimatedReadTime": estimated_read_time(text),
    }


def analyze_resume_with_inference(text: str, client) -> dict:
    """
    Analyze resume text with hosted models.

    Args:
        text: Resume text
        client: HuggingFaceClient (or anything with the same methods)

    Returns:
        dict with scores, summary, strengths, improvements and keywords

    Raises:
        InferenceError: if any hosted call fails
    """
    summary = client.summarize_text(text)
    sections = client.classify_text(text, SECTION_LABELS)
    sentiment = client.analyze_sentiment(text)
    skills = client.classify_text(text, SKILL_LABELS)

    experience_score = sections.get("work experience", 0.0) * 100
    education_score = sections.get("education", 0.0) * 100
    skills_score = sections.get("technical skills", 0.0) * 100
    format_score = 75

    overall_score = (experience_score + education_score + skills_score + format_score) / 4

    strengths = []
    improvements = []

    if experience_score > 60:
        strengths.append("Strong work experience section")
    else:
        improvements.append("Expand your work experience descriptions")

    if education_score > 60:
        strengths.append("Well-documented education")
    else:
        improvements.append("Add more details about your education")

    if skills_score > 60:
        strengths.append("Good technical skills coverage")
    else:
        improvements.append("Include more relevant technical skills")

    keywords = [label for label in SKILL_LABELS if skills.get(label, 0.0) > 0.3]

    return {
        "overallScore": round(overall_score),
        "experienceScore": round(experience_score),
        "educationScore": round(education_score),
        "skillsScore": round(skills_score),
        "formatScore": format_score,
        "summary": summary,
        "strengths": strengths,
        "improvements": improvements,
        "keywords": keywords,
        "sentiment": sentiment[0] if sentiment else None,
        "wordCount": word_count(text),
        "estimatedReadTime": estimated_read_time(text),
    }


def analyze_resume(text: str, client: Optional[object] = None) -> dict:
    """Use hosted models when a configured client is given, heuristics otherwise."""
    if client is not None and getattr(client, "configured", False):
        return analyze_resume_with_inference(text, client)
    return analyze_resume_text(text)


def analyze_resume_file(file_path: str) -> dict:
    """
    Analyze a resume file and return structured results.

    Returns:
        dict with success flag and the heuristic analysis
    """
    text = extract_text(file_path)

    if text.startswith("[ERROR]"):
        return {"success": False, "error": text}

    if not text.strip():
        return {"success": False, "error": "File is empty"}

    return {"success": True, "file": Path(file_path).name, "analysis": analyze_resume_text(text)}
