"""
Constants for guardrails in MindForm.
"""

# Patterns that might indicate injection attempts
SUSPICIOUS_PATTERNS = [
    r"<script",
    r"javascript:",
    r"\bon\w+\s*=\s*[\"']",
    r"\{\{.*\}\}",
    r"\$\{.*\}",
    r"eval\s*\(",
    r"__proto__",
    r"ignore (all )?(previous|prior) instructions",
]

MAX_DESCRIPTION_LENGTH = 5000

MAX_FIELDS = 50
