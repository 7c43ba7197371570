from datetime import datetime
from typing import Dict, List, Optional

from pydantic import ConfigDict, Field

from .event import CamelModel


class _ContentModel(CamelModel):
    model_config = ConfigDict(extra="forbid")


class ResumeHeader(_ContentModel):
    full_name: str = ""
    email: str = ""
    city: str = ""
    country: str = ""
    linkedin_url: str = ""
    github_url: str = ""


class ResumeExperience(_ContentModel):
    role: str = ""
    company: str = ""
    date_from: str = ""
    date_to: str = ""
    bullet_points: List[str] = Field(default_factory=list)


class ResumeEducation(_ContentModel):
    degree: str = ""
    university: str = ""
    year_from: str = ""
    year_to: str = ""
    cgpa: str = ""
    relevant_coursework: str = ""


class ResumeProject(_ContentModel):
    name: str = ""
    description: str = ""
    link: str = ""


class ResumeCertification(_ContentModel):
    name: str = ""
    issuer: str = ""
    date: str = ""
    link: str = ""


class ContactItem(_ContentModel):
    text: str = ""
    link: str = ""


class SiteConfigContent(_ContentModel):
    """Every editable piece of site copy, from the hero title to the contact items"""
    hero_title_left: str = ""
    hero_title_right: str = ""
    hero_subtitle: str = ""
    scroll_prompt_text: str = ""
    vcr_section_title: str = ""
    vcr_instruction_text: str = ""
    empty_tv_message: str = ""
    workbench_title: str = ""
    floor_section_title: str = ""

    resume_header: ResumeHeader = Field(default_factory=ResumeHeader)
    resume_summary: str = ""
    resume_experience: List[ResumeExperience] = Field(default_factory=list)
    resume_education: List[ResumeEducation] = Field(default_factory=list)
    # category name -> skills
    resume_skills: Dict[str, List[str]] = Field(default_factory=dict)
    resume_projects: List[ResumeProject] = Field(default_factory=list)
    resume_achievements: List[str] = Field(default_factory=list)
    resume_certifications: List[ResumeCertification] = Field(default_factory=list)

    contact_polaroid: ContactItem = Field(default_factory=ContactItem)
    contact_envelope: ContactItem = Field(default_factory=ContactItem)
    contact_pcb: ContactItem = Field(default_factory=ContactItem, alias="contactPCB")
    contact_sticky_note: ContactItem = Field(default_factory=ContactItem)


class SiteConfigUpdate(SiteConfigContent):
    """Partial update: only the keys present in the request are written"""
    pass


class SiteConfigDetail(SiteConfigContent):
    model_config = ConfigDict(extra="ignore")

    updated_at: Optional[datetime] = None


class SiteConfigResponse(CamelModel):
    message: str
    data: Optional[SiteConfigDetail]


DEFAULT_SITE_CONFIG = SiteConfigContent(
    hero_title_left="THE",
    hero_title_right="DIGITAL OBSERVER",
    hero_subtitle="Welcome to my portfolio",
    scroll_prompt_text="Scroll to explore",
    vcr_section_title="Projects",
    vcr_instruction_text="Drag a cassette to the VCR to watch",
    empty_tv_message="Insert a cassette to watch a project",
    workbench_title="Resume",
    floor_section_title="Contact",
    resume_header=ResumeHeader(
        full_name="Your Name",
        email="your.email@example.com",
        city="City",
        country="Country",
        linkedin_url="https://linkedin.com/in/yourprofile",
        github_url="https://github.com/yourusername",
    ),
    resume_summary="Professional summary goes here...",
    contact_polaroid=ContactItem(text="LinkedIn", link="https://linkedin.com/in/yourprofile"),
    contact_envelope=ContactItem(text="Email", link="mailto:your.email@example.com"),
    contact_pcb=ContactItem(text="GitHub", link="https://github.com/yourusername"),
    contact_sticky_note=ContactItem(text="Portfolio", link="https://yourportfolio.com"),
)
