"""Abstract base class for all per-category scorers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from moviematch.models import Answer, CandidateMovie, Question, QuestionCategory

# Sub-score for a user with no usable answer on a category.
NEUTRAL_SCORE = 0.5


class CategoryScorer(ABC):
    """Abstract base class for all per-category scorers.

    Each scorer judges how acceptable one movie is to one user along a single
    preference axis.  :func:`~moviematch.scoring.compute_match_score` calls
    the scorer once per user and combines both sub-scores with a geometric
    mean, so a scorer only ever sees a single user's answer.

    Subclasses set :attr:`category` and implement :meth:`score_answer`.
    """

    category: QuestionCategory

    def score(
        self,
        movie: CandidateMovie,
        answer: Answer | None,
        question: Question,
    ) -> float:
        """Return the user's sub-score for *movie* in ``[0, 1]``.

        Args:
            movie: The candidate being judged.
            answer: The user's answer to *question*, or ``None`` if the user
                did not answer it.
            question: The round's question for this category.

        Returns:
            :data:`NEUTRAL_SCORE` when *answer* is ``None``; otherwise the
            result of :meth:`score_answer`.
        """
        if answer is None:
            return NEUTRAL_SCORE
        return self.score_answer(movie, answer, question)

    @abstractmethod
    def score_answer(
        self,
        movie: CandidateMovie,
        answer: Answer,
        question: Question,
    ) -> float:
        """Return the sub-score for *movie* given a present *answer*.

        Implementations **must** return a value in ``[0, 1]`` and **must
        not** raise for selections they do not recognise; those count as no
        usable answer and score :data:`NEUTRAL_SCORE`.
        """
