"""Static, non-personalized recommendations returned when generation is not possible."""

from typing import Tuple

from .recommendation import RecommendationRecord

DEFAULT_RECOMMENDATIONS: Tuple[RecommendationRecord, ...] = (
    RecommendationRecord(
        role_title="Software Developer",
        description=(
            "Software developers create applications and systems that run on computers and other devices. "
            "They design, code, test, and maintain software solutions for various problems and needs."
        ),
        why_it_fits_professionally=(
            "Your technical skills and problem-solving abilities would make you a strong candidate for software "
            "development roles. Your experience with analytical thinking aligns well with the core competencies needed."
        ),
        why_it_fits_personally=(
            "Your interest in creating solutions and solving complex problems makes software development a "
            "fulfilling career path that matches your personal interests."
        ),
    ),
    RecommendationRecord(
        role_title="Data Analyst",
        description=(
            "Data analysts examine datasets to identify trends and draw conclusions. "
            "They present findings to help organizations make better business decisions."
        ),
        why_it_fits_professionally=(
            "Your analytical thinking skills and attention to detail would serve you well as a data analyst. "
            "This role leverages your abilities to find patterns and insights in complex information."
        ),
        why_it_fits_personally=(
            "Your curiosity and interest in uncovering insights from information makes data analysis a personally "
            "satisfying career that aligns with your values."
        ),
    ),
    RecommendationRecord(
        role_title="Product Manager",
        description=(
            "Product managers oversee the development of products from conception to launch. They define product "
            "strategy, gather requirements, and coordinate with different teams to ensure successful delivery."
        ),
        why_it_fits_professionally=(
            "Your combination of technical understanding and strategic planning abilities makes product management "
            "a good professional fit. This role utilizes both your analytical and communication skills."
        ),
        why_it_fits_personally=(
            "Your interest in both the business and technical aspects of products, along with your desire to create "
            "meaningful solutions, aligns well with product management."
        ),
    ),
)
