from enum import Enum


class ContactCategory(str, Enum):
    job_inquiry = "Job Inquiry"
    collaboration = "Collaboration Opportunity"
    feedback = "General Feedback"
    other = "Other"
