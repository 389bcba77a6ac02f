"""
Evaluation infrastructure -- code-graded eval tasks for the capability engine.

Run evals: pytest evals/ -v
Run one area: pytest evals/tasks/test_alignment_evals.py -v
"""
