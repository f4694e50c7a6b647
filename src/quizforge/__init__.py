"""Generate, take and export quizzes."""
