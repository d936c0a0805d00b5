"""
Prompt templates for the four AI actions.

Every function here is pure: identical arguments always render identical text.
User input is embedded verbatim.
"""
import json
from typing import Optional, Dict, Any

from app.schemas.ai import (
    ActionKind,
    ContentOptions,
    QuestionOptions,
    RoadmapOptions,
)

# Sampling temperature per action
ACTION_TEMPERATURES = {
    ActionKind.EXTRACT_SKILLS: 0.3,
    ActionKind.GENERATE_ROADMAP: 0.7,
    ActionKind.ASK_QUESTION: 0.8,
    ActionKind.GENERATE_CONTENT: 0.8,
}

DEFAULT_JOB_APPLICATION_TIMING = "Apply after completing 60-70% of the roadmap"


SKILL_EXTRACTION_TEMPLATE = """You are an expert CV/resume analyzer. Analyze the following CV/resume text and extract structured information.

CV Text:
{cv_text}

Please extract and return a JSON object with the following structure:
{{
  "technical_skills": [
    {{"name": "Python", "proficiency": "advanced", "category": "programming_language"}},
    {{"name": "React", "proficiency": "intermediate", "category": "framework"}}
  ],
  "soft_skills": ["communication", "leadership", "problem-solving"],
  "roles": ["Software Engineer", "Full Stack Developer"],
  "domains": ["Web Development", "E-commerce"],
  "certifications": ["AWS Certified Solutions Architect"],
  "tools": ["Git", "Docker", "Jenkins"],
  "years_of_experience": 3.5,
  "education": ["B.S. Computer Science"]
}}

Guidelines:
- Extract ONLY what is explicitly mentioned or strongly implied in the CV
- For technical_skills, include programming languages, frameworks, libraries
- Categories: programming_language, framework, library, database, cloud, devops, design_tool
- Proficiency levels: beginner, intermediate, advanced, expert (infer from context)
- Be comprehensive but accurate
- Return valid JSON only, no additional text"""


ROADMAP_TEMPLATE = """You are an expert career advisor and learning path designer. Create a comprehensive learning roadmap for: {tech_stack}{learner_profile}

Return a JSON object with this structure:
{{
  "stack_name": "Full Stack Development",
  "prerequisites": ["Basic programming knowledge", "HTML/CSS basics"],
  "estimated_duration": "6-8 months",
  "difficulty": "intermediate",
  "phases": [
    {{
      "phase": 1,
      "title": "Fundamentals",
      "topics": ["JavaScript basics", "ES6+ features", "DOM manipulation"],
      "duration": "4-6 weeks",
      "resources": ["MDN Web Docs", "JavaScript.info"]
    }}
  ],
  "project_suggestions": [
    {{"title": "Personal portfolio", "description": "Deploy a responsive portfolio site", "phase": 2}}
  ],
  "job_application_timing": "{default_timing}"
}}

Guidelines:
- Create 4-6 phases with logical progression
- Each phase should have specific, actionable topics
- Include realistic time estimates{schedule_guideline}
- Suggest high-quality free and paid resources
- Suggest portfolio projects that prove the skills of each stage
- Consider the user's current skills if provided
- Return valid JSON only"""


QUESTION_TEMPLATE = """You are a knowledgeable career advisor specializing in technology careers. Answer the following question:

Question: {question}{context}

Provide a helpful, accurate, and actionable answer. Include:
- Direct answer to the question
- Practical advice or steps
- Related topics the user might find helpful

Return a JSON object:
{{
  "question": "the question",
  "answer": "your detailed answer here",
  "related_topics": ["topic1", "topic2", "topic3"]
}}

Return valid JSON only."""


CONTENT_TEMPLATE = """You are an expert career content writer. Generate {content_type} based on the following:

Input:
{input_text}

Parameters:
{parameters}

Return a JSON object:
{{
  "content_type": "{content_type}",
  "content": "the generated content here",
  "metadata": {{"word_count": 150, "tone": "professional"}}
}}

Guidelines:
- Make it professional and tailored
- Be specific and actionable
- Use appropriate formatting
- Return valid JSON only"""


def build_skill_extraction_prompt(cv_text: str) -> str:
    return SKILL_EXTRACTION_TEMPLATE.format(cv_text=cv_text)


def build_roadmap_prompt(
    tech_stack: str,
    current_skills: Optional[str] = None,
    timeframe_months: Optional[int] = None,
    learning_hours_per_week: Optional[int] = None,
) -> str:
    """
    Render the roadmap prompt.

    Optional fields are appended to the learner profile only when present, and
    a known schedule adds a guideline to fit the phases into it.
    """
    learner_profile = ""
    if current_skills:
        learner_profile += f"\n\nCurrent skills: {current_skills}"
    if timeframe_months is not None:
        learner_profile += f"\nTimeframe: {timeframe_months} months"
    if learning_hours_per_week is not None:
        learner_profile += f"\nAvailable study time: {learning_hours_per_week} hours per week"

    schedule_guideline = ""
    if timeframe_months is not None or learning_hours_per_week is not None:
        schedule_guideline = "\n- Fit the phase durations into the learner's timeframe and weekly study hours"

    return ROADMAP_TEMPLATE.format(
        tech_stack=tech_stack,
        learner_profile=learner_profile,
        default_timing=DEFAULT_JOB_APPLICATION_TIMING,
        schedule_guideline=schedule_guideline,
    )


def build_question_prompt(question: str, context: Optional[str] = None) -> str:
    context_text = f"\n\nContext: {context}" if context else ""
    return QUESTION_TEMPLATE.format(question=question, context=context_text)


def build_content_prompt(
    content_type: str,
    input_text: str,
    parameters: Optional[Dict[str, Any]] = None,
) -> str:
    params_text = json.dumps(parameters, indent=2) if parameters is not None else ""
    return CONTENT_TEMPLATE.format(
        content_type=content_type,
        input_text=input_text,
        parameters=params_text,
    )


def build_prompt(action: ActionKind, input_text: str, options=None) -> str:
    """
    Render the prompt for an action from its typed options.

    Args:
        action: Action to render
        input_text: Caller input embedded in the template
        options: RoadmapOptions / QuestionOptions / ContentOptions matching the action

    Returns:
        Prompt text
    """
    if action == ActionKind.EXTRACT_SKILLS:
        return build_skill_extraction_prompt(input_text)
    if action == ActionKind.GENERATE_ROADMAP:
        options = options or RoadmapOptions()
        return build_roadmap_prompt(
            input_text,
            options.current_skills,
            options.timeframe_months,
            options.learning_hours_per_week,
        )
    if action == ActionKind.ASK_QUESTION:
        options = options or QuestionOptions()
        return build_question_prompt(input_text, options.context)
    if action == ActionKind.GENERATE_CONTENT:
        options = options or ContentOptions()
        return build_content_prompt(options.content_type, input_text, options.parameters)
    raise ValueError(f"Unknown action: {action}")
