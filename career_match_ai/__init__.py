"""Career Match AI: career role recommendations from discovery data and resumes."""
