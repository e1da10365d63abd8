"""
Cold Mailer - Job-aware cold outreach email service

This application:
1. Loads a job posting page (or accepts job data directly)
2. Extracts role, experience, skills and description with Claude
3. Normalizes the extracted data and rejects error pages
4. Matches the job's skills against a curated portfolio index
5. Drafts a personalized cold email that cites the matched links
"""

__version__ = "1.0.0"
__author__ = "Cold Mailer"
