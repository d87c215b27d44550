"""
Use cases grouped by feature:
  - auth: signup / login / me / logout / profile / Google OAuth
  - interview: AI coach turns and evaluation
"""
