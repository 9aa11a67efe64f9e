from dataclasses import dataclass
from typing import Optional, Sequence

from sqlalchemy.orm import Session

from pathfinder.db.models.gamification import QuizAttempt
from pathfinder.db.models.user import User
from pathfinder.services.gamification import grant_xp, check_quiz_badges

OPEN_ENDED = -1  # any option is accepted (personality questions)


@dataclass(frozen=True)
class Question:
    id: int
    question: str
    options: tuple
    correct_answer: int
    category: str
    explanation: str

    def is_correct(self, answer: int) -> bool:
        return self.correct_answer == OPEN_ENDED or answer == self.correct_answer


@dataclass(frozen=True)
class QuizCategory:
    id: str
    name: str
    icon: str
    color: str
    description: str
    xp_reward: int
    questions: tuple

    @property
    def is_personality(self) -> bool:
        return all(q.correct_answer == OPEN_ENDED for q in self.questions)


@dataclass(frozen=True)
class QuizScore:
    correct: int
    total: int
    percentage: int


QUIZ_CATEGORIES = (
    QuizCategory(
        id="personality",
        name="Career Personality",
        icon="brain",
        color="primary",
        description="Discover your work style and ideal career environment",
        xp_reward=100,
        questions=(
            Question(1, "When working on a project, you prefer to:",
                     ("Work alone with full control", "Collaborate with a small team", "Lead a large group", "Support others' work"),
                     OPEN_ENDED, "Work Style",
                     "Understanding your work style helps match you with suitable career paths."),
            Question(2, "You feel most energized when:",
                     ("Solving complex problems", "Creating something new", "Helping others succeed", "Organizing and planning"),
                     OPEN_ENDED, "Motivation",
                     "Your energy sources indicate which careers will be most fulfilling."),
            Question(3, "In a team conflict, you typically:",
                     ("Analyze the facts objectively", "Find creative compromises", "Mediate between parties", "Follow established procedures"),
                     OPEN_ENDED, "Conflict Resolution",
                     "Conflict resolution styles influence your leadership potential."),
        ),
    ),
    QuizCategory(
        id="tech",
        name="Tech Knowledge",
        icon="code",
        color="secondary",
        description="Test your understanding of technology and programming",
        xp_reward=75,
        questions=(
            Question(1, "What does HTML stand for?",
                     ("Hyper Text Markup Language", "High Tech Modern Language", "Hyper Transfer Markup Language", "Home Tool Markup Language"),
                     0, "Web Development",
                     "HTML is the standard markup language for creating web pages."),
            Question(2, "Which data structure uses LIFO (Last In, First Out)?",
                     ("Queue", "Stack", "Array", "Linked List"),
                     1, "Data Structures",
                     "A Stack follows LIFO - the last element added is the first removed."),
            Question(3, "What is the time complexity of binary search?",
                     ("O(n)", "O(log n)", "O(n²)", "O(1)"),
                     1, "Algorithms",
                     "Binary search halves the search space each iteration, giving O(log n)."),
        ),
    ),
    QuizCategory(
        id="aptitude",
        name="Aptitude Test",
        icon="calculator",
        color="accent",
        description="Assess your logical reasoning and problem-solving skills",
        xp_reward=80,
        questions=(
            Question(1, "If 2x + 5 = 15, what is x?",
                     ("3", "5", "7", "10"),
                     1, "Mathematics",
                     "2x = 15 - 5 = 10, so x = 5"),
            Question(2, "Complete the series: 2, 6, 18, 54, ?",
                     ("108", "162", "216", "128"),
                     1, "Pattern Recognition",
                     "Each number is multiplied by 3. 54 × 3 = 162"),
            Question(3, "A train travels 300km in 4 hours. What is its speed?",
                     ("60 km/h", "75 km/h", "80 km/h", "70 km/h"),
                     1, "Speed & Distance",
                     "Speed = Distance/Time = 300/4 = 75 km/h"),
        ),
    ),
    QuizCategory(
        id="design",
        name="Creative & Design",
        icon="palette",
        color="warning",
        description="Explore your creative thinking and design sensibility",
        xp_reward=70,
        questions=(
            Question(1, "Which color combination creates the highest contrast?",
                     ("Blue and Green", "Black and White", "Red and Orange", "Yellow and White"),
                     1, "Color Theory",
                     "Black and white create the maximum possible contrast."),
            Question(2, "What is the golden ratio approximately equal to?",
                     ("1.414", "1.618", "2.718", "3.14"),
                     1, "Design Principles",
                     "The golden ratio (φ) ≈ 1.618, found throughout nature and art."),
            Question(3, "Which design principle refers to visual weight distribution?",
                     ("Contrast", "Balance", "Alignment", "Proximity"),
                     1, "Layout Design",
                     "Balance refers to how visual weight is distributed in a design."),
        ),
    ),
)

_QUIZZES_BY_ID = {quiz.id: quiz for quiz in QUIZ_CATEGORIES}


def get_quiz(quiz_id: str) -> Optional[QuizCategory]:
    return _QUIZZES_BY_ID.get(quiz_id)


def score_quiz(quiz: QuizCategory, answers: Sequence[int]) -> QuizScore:
    """
    Scores one answer index per question, in question order.
    Raises ValueError when answers are missing or out of range.
    """
    if len(answers) != len(quiz.questions):
        raise ValueError(f"Expected {len(quiz.questions)} answers, got {len(answers)}")

    for question, answer in zip(quiz.questions, answers):
        if not 0 <= answer < len(question.options):
            raise ValueError(f"Answer {answer} is not a valid option for question {question.id}")

    correct = sum(1 for q, a in zip(quiz.questions, answers) if q.is_correct(a))
    total = len(quiz.questions)
    return QuizScore(correct=correct, total=total, percentage=round(correct / total * 100))


def complete_quiz(db: Session, user: User, quiz: QuizCategory, answers: Sequence[int]) -> tuple[QuizScore, list[str]]:
    """Scores, stores the attempt, grants the category XP and re-checks quiz badges."""
    score = score_quiz(quiz, answers)

    db.add(QuizAttempt(
        user_id=user.id,
        quiz_id=quiz.id,
        correct=score.correct,
        total=score.total,
        percentage=score.percentage,
        xp_awarded=quiz.xp_reward,
    ))
    db.commit()

    grant_xp(db, user, f"Completed {quiz.name} quiz", quiz.xp_reward)
    unscored = [q.id for q in QUIZ_CATEGORIES if q.is_personality]
    new_badges = check_quiz_badges(db, user.id, unscored_quiz_ids=unscored)
    return score, new_badges
