"""
scoring/ - Partner Scoring Engine

Modules:
    utils.py        - Rounding and finite-number helpers
    questions.py    - Common (15) and overseas (8) question catalogs
    calculator.py   - 0-100 score from 0-5 answers, lenient preview
    rating.py       - Score to rating band classifier
    validation.py   - Strict answer validation before saving
    versioning.py   - Evaluation version numbering and latest selection
"""
