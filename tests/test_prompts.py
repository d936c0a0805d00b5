"""
Tests for prompt rendering.
"""
import json

from app.llm import prompts
from app.schemas.ai import ActionKind, ContentOptions, QuestionOptions, RoadmapOptions


def test_build_prompt_is_deterministic():
    """Same action, input and options always render the same text."""
    cases = [
        (ActionKind.EXTRACT_SKILLS, "Senior Python developer, 5 years, AWS", None),
        (ActionKind.GENERATE_ROADMAP, "Data Engineer", RoadmapOptions(current_skills="SQL", timeframe_months=6)),
        (ActionKind.ASK_QUESTION, "How do I move into DevOps?", QuestionOptions(context="Junior sysadmin")),
        (ActionKind.GENERATE_CONTENT, "Write a cover letter", ContentOptions(content_type="cover_letter", parameters={"tone": "formal"})),
    ]
    for action, text, options in cases:
        first = prompts.build_prompt(action, text, options)
        second = prompts.build_prompt(action, text, options)
        assert first == second
        assert text in first


def test_skill_extraction_prompt_embeds_cv_and_schema():
    prompt = prompts.build_skill_extraction_prompt("Built APIs with FastAPI")
    assert "CV Text:\nBuilt APIs with FastAPI" in prompt
    assert '"technical_skills"' in prompt
    assert '"years_of_experience": 3.5' in prompt
    assert prompt.endswith("Return valid JSON only, no additional text")


def test_user_input_is_not_escaped():
    """Braces in user input must survive formatting untouched."""
    prompt = prompts.build_question_prompt("What does {role} mean in {{jinja}}?")
    assert "Question: What does {role} mean in {{jinja}}?" in prompt


def test_roadmap_prompt_without_optional_fields():
    prompt = prompts.build_roadmap_prompt("Full Stack Development")
    assert "learning roadmap for: Full Stack Development\n\nReturn a JSON object" in prompt
    assert "Current skills" not in prompt
    assert "Timeframe" not in prompt
    assert "weekly study hours" not in prompt


def test_roadmap_prompt_threads_learner_profile():
    prompt = prompts.build_roadmap_prompt(
        "Backend Developer",
        current_skills="Python, SQL",
        timeframe_months=6,
        learning_hours_per_week=10,
    )
    assert "Current skills: Python, SQL" in prompt
    assert "Timeframe: 6 months" in prompt
    assert "Available study time: 10 hours per week" in prompt
    assert "Fit the phase durations into the learner's timeframe and weekly study hours" in prompt
    assert '"project_suggestions"' in prompt
    assert prompts.DEFAULT_JOB_APPLICATION_TIMING in prompt


def test_question_prompt_context_is_optional():
    without = prompts.build_question_prompt("Should I learn Rust?")
    with_context = prompts.build_question_prompt("Should I learn Rust?", "Skills: Go")
    assert "Context:" not in without
    assert "Question: Should I learn Rust?\n\nContext: Skills: Go" in with_context


def test_content_prompt_embeds_pretty_parameters():
    parameters = {"content_type": "professional_summary", "tone": "professional"}
    prompt = prompts.build_content_prompt("professional_summary", "Profile text", parameters)
    assert "Generate professional_summary based on the following" in prompt
    assert json.dumps(parameters, indent=2) in prompt
    assert '"content_type": "professional_summary"' in prompt


def test_content_prompt_defaults_to_generic():
    prompt = prompts.build_prompt(ActionKind.GENERATE_CONTENT, "Some input")
    assert "Generate generic based on the following" in prompt
    assert "Parameters:\n\n" in prompt


def test_action_temperatures():
    assert prompts.ACTION_TEMPERATURES[ActionKind.EXTRACT_SKILLS] == 0.3
    assert prompts.ACTION_TEMPERATURES[ActionKind.GENERATE_ROADMAP] == 0.7
    assert prompts.ACTION_TEMPERATURES[ActionKind.ASK_QUESTION] == 0.8
    assert prompts.ACTION_TEMPERATURES[ActionKind.GENERATE_CONTENT] == 0.8
