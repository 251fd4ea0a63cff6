"""
Question Catalog
partner_rating/scoring/questions.py

Fixed, ordered rubric questions. Order defines positional alignment with
answer arrays: the answer at index i belongs to the question at index i.

Common (asked for every partner), 15 items in five categories:
    c1  Transparency of interests
    c2  Balance of contribution and outcome
    c3  Legal and institutional safeguards
    c4  Proven ability to execute
    c5  Exit strategy

Overseas (asked only for overseas partners), 8 items in four categories:
    oA  Local legal environment
    oB  Language and cultural gaps
    oC  Execution and sustainability
    oD  Exit strategy (overseas)
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from partner_rating.models.enumerations import PartnerScope, QuestionSet

MAX_PER_ITEM = 5
MIN_PER_ITEM = 0


@dataclass(frozen=True)
class Question:
    id: str
    text: str
    category: str


COMMON_QUESTIONS: Tuple[Question, ...] = (
    Question("c1a", "Is the partner's objective clearly stated?", "c1"),
    Question("c1b", "Would the project stall if we withdrew?", "c1"),
    Question("c1c", "Does the partner treat us as an equal partner?", "c1"),
    Question("c2a", "Are our inputs (money, time, effort) balanced against theirs?", "c2"),
    Question("c2b", "Will our name remain on the deliverables?", "c2"),
    Question("c2c", "Is the outcome a mutual win?", "c2"),
    Question("c3a", "Does the contract or MoU state rights and ownership?", "c3"),
    Question("c3b", "Is the split of costs and profits agreed in writing?", "c3"),
    Question("c3c", "Are responsibilities on early exit documented?", "c3"),
    Question("c4a", "Does the partner have past results or references?", "c4"),
    Question("c4b", "Can their network and influence actually be verified?", "c4"),
    Question("c4c", "Can they carry the project through to the end?", "c4"),
    Question("c5a", "Is there a minimum asset we keep if things go wrong?", "c5"),
    Question("c5b", "Does the contract include withdrawal and termination clauses?", "c5"),
    Question("c5c", "Do we still gain something if the project fails?", "c5"),
)

OVERSEAS_QUESTIONS: Tuple[Question, ...] = (
    Question("oAa", "Will the contract be legally enforceable locally?", "oA"),
    Question("oAb", "Are relations with government and institutions stable?", "oA"),
    Question("oBa", "Are key agreements always recorded in both languages?", "oB"),
    Question("oBb", "Do we have a local advisor or broker to reduce cultural misunderstandings?", "oB"),
    Question("oCa", "Does the partner actually hold the funds to execute?", "oC"),
    Question("oCb", "Have we confirmed this is a sustainable structure, not a one-off event?", "oC"),
    Question("oDa", "Can we secure a replacement partner if problems arise?", "oD"),
    Question("oDb", "Can we recover assets left locally (technology, data, content)?", "oD"),
)

CATEGORY_LABELS: Dict[str, str] = {
    "c1": "1. Transparency of interests",
    "c2": "2. Balance of contribution and outcome",
    "c3": "3. Legal and institutional safeguards",
    "c4": "4. Proven ability to execute",
    "c5": "5. Exit strategy",
    "oA": "A. Local legal environment",
    "oB": "B. Language and cultural gaps",
    "oC": "C. Execution and sustainability",
    "oD": "D. Exit strategy (overseas)",
}


def questions_for(question_set: QuestionSet) -> Tuple[Question, ...]:
    if question_set == QuestionSet.OVERSEAS:
        return OVERSEAS_QUESTIONS
    return COMMON_QUESTIONS


def item_count(scope: PartnerScope) -> int:
    """Number of questions a partner of the given scope answers."""
    if scope == PartnerScope.OVERSEAS:
        return len(COMMON_QUESTIONS) + len(OVERSEAS_QUESTIONS)
    return len(COMMON_QUESTIONS)
