"""
Prompt text for question generation and answer grading.
"""
from typing import Optional, Sequence

GENERATION_SYSTEM_PROMPT = (
    "You are an expert technical interviewer specializing in verbal/conversational interviews. "
    "Generate high-quality interview questions that can be answered verbally through discussion "
    "and explanation. NEVER generate coding questions, implementation tasks, or questions requiring "
    "code. Focus on conceptual understanding, experience, design decisions, and problem-solving "
    "approaches that can be discussed verbally."
)

GRADING_SYSTEM_PROMPT = (
    "You are an expert technical interviewer evaluating candidate answers. Provide comprehensive, "
    "fair, and constructive feedback. Score answers on a scale of 0-10 based on accuracy, depth, "
    "clarity, and relevance."
)

QUESTION_CATEGORIES = ("conceptual", "experience", "design", "troubleshooting", "comparison")


def build_generation_prompt(
    skills: Sequence[str],
    questions_per_skill: int,
    difficulty: str,
    context: Optional[str] = None,
) -> str:
    skills_list = "\n".join(f"{i}. {skill}" for i, skill in enumerate(skills, start=1))
    total = len(skills) * questions_per_skill
    categories = "|".join(QUESTION_CATEGORIES)
    extra = f"\n\nAdditional Context: {context}" if context else ""

    return f"""Generate {total} verbal interview questions ({questions_per_skill} per skill) for the following technical skills:

{skills_list}

Difficulty Level: {difficulty}

IMPORTANT REQUIREMENTS:
- Questions must be ANSWERABLE VERBALLY - candidates explain their answer by speaking
- NO coding questions, NO implementation tasks, NO "write code" or "implement" questions
- Questions should focus on conceptual understanding, best practices, design decisions,
  experience-based scenarios, architecture discussions, trade-offs and troubleshooting
- Each question must be specific to one of the listed skills
- Questions should be appropriate for {difficulty} level
- Start questions with "Explain", "Describe", "Tell me about", "What would you do if", "How would you approach", etc.{extra}

Return the response as a JSON object with this structure:
{{
  "questions": [
    {{
      "skill": "skill name",
      "question": "the interview question (must be answerable verbally)",
      "difficulty": "{difficulty}",
      "category": "{categories}",
      "expectedAnswer": "optional short description of a strong answer"
    }}
  ]
}}
"""


def build_grading_prompt(questions, answers) -> str:
    """
    Pair every answer with its question and ask for a full interview evaluation.

    Answers are matched to questions by question_index, falling back to
    their position when the index is outside the question list.
    """
    pairs = []
    for position, answer in enumerate(answers):
        if 0 <= answer.question_index < len(questions):
            question = questions[answer.question_index]
        else:
            question = questions[min(position, len(questions) - 1)]
        expected = f"\nExpected Answer Context: {question.expected_answer}" if question.expected_answer else ""
        pairs.append(
            f"Question {answer.question_index + 1} (questionIndex {answer.question_index}):\n"
            f"Skill: {question.skill}\n"
            f"Question: {question.text}{expected}\n"
            f"Candidate Answer: {answer.transcription}"
        )
    question_answer_pairs = "\n\n".join(pairs)

    return f"""You are evaluating a full technical interview.
Provide:
1) Detailed evaluation for each answer (score 0-10, feedback, strengths, weaknesses)
2) An overall interview score (0-10)
3) A comprehensive interview-level summary describing overall performance
4) Interview-level recommendations for improvement
5) Interview-level strengths and weaknesses aggregated across all questions

Evaluate the following interview answers:

{question_answer_pairs}

Return your evaluation as a JSON object with this structure (valid JSON only):
{{
  "evaluations": [
    {{
      "questionIndex": 0,
      "score": 8.5,
      "feedback": "Detailed feedback about the answer",
      "strengths": ["strength1", "strength2"],
      "weaknesses": ["weakness1", "weakness2"]
    }}
  ],
  "overallScore": 8.2,
  "summary": "Overall assessment of the interview performance",
  "recommendations": ["recommendation1", "recommendation2"],
  "interviewStrengths": ["overall strength 1", "overall strength 2"],
  "interviewWeaknesses": ["overall weakness 1", "overall weakness 2"]
}}
"""
