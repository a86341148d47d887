from portfolio.models.analytics import VisitEvent
from portfolio.models.profile import PersonalInfo, ContactDetails, SINGLETON_KEY
from portfolio.models.content import (
    Project, ProjectCreate, ProjectUpdate,
    Education, EducationCreate, EducationUpdate,
    Certificate, CertificateCreate, CertificateUpdate,
    Skill, SkillCreate, SkillUpdate,
)

__all__ = [
    "VisitEvent",
    "PersonalInfo", "ContactDetails", "SINGLETON_KEY",
    "Project", "ProjectCreate", "ProjectUpdate",
    "Education", "EducationCreate", "EducationUpdate",
    "Certificate", "CertificateCreate", "CertificateUpdate",
    "Skill", "SkillCreate", "SkillUpdate",
]
