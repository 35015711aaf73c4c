"""Built-in question bank used when an assessment has no stored questions."""

from __future__ import annotations

from typing import List

from .records import Question

_DEFAULT_QUESTIONS = (
    Question(
        id="1",
        question_text="What is the primary purpose of the attention mechanism in Transformer models?",
        options=[
            "To reduce computational complexity",
            "To allow the model to focus on relevant parts of the input",
            "To increase training speed",
            "To reduce model size",
        ],
        correct_answer="To allow the model to focus on relevant parts of the input",
        points=10,
        order_number=1,
    ),
    Question(
        id="2",
        question_text="Which of the following is NOT a common NLP preprocessing step?",
        options=["Tokenization", "Lemmatization", "Gradient descent", "Stop word removal"],
        correct_answer="Gradient descent",
        points=10,
        order_number=2,
    ),
    Question(
        id="3",
        question_text="What does BERT stand for?",
        options=[
            "Bidirectional Encoder Representations from Transformers",
            "Basic Encoding for Recurrent Transformers",
            "Binary Encoder for Real-time Transformations",
            "Balanced Embedding Representation Technique",
        ],
        correct_answer="Bidirectional Encoder Representations from Transformers",
        points=10,
        order_number=3,
    ),
    Question(
        id="4",
        question_text="In machine learning, what is overfitting?",
        options=[
            "When the model performs poorly on both training and test data",
            "When the model performs well on training data but poorly on test data",
            "When the model takes too long to train",
            "When the model uses too few parameters",
        ],
        correct_answer="When the model performs well on training data but poorly on test data",
        points=10,
        order_number=4,
    ),
    Question(
        id="5",
        question_text="What is the purpose of word embeddings in NLP?",
        options=[
            "To compress text data",
            "To represent words as dense vectors that capture semantic meaning",
            "To remove stop words from text",
            "To translate text between languages",
        ],
        correct_answer="To represent words as dense vectors that capture semantic meaning",
        points=10,
        order_number=5,
    ),
)


def default_questions() -> List[Question]:
    return [question.model_copy(deep=True) for question in _DEFAULT_QUESTIONS]


__all__ = ["default_questions"]
