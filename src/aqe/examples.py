"""
Example questionnaire: the Recovery+ discovery assessment.

Five sections (basic info, injury details, symptoms, goals, medical
history) with branching follow-ups:
    - previous_injury_details   if previous_injuries == True
    - weeks_since_surgery       if injury_type == "post_surgery"
    - high_pain_support         if current_pain_level > 7
    - nerve_symptom_location    if primary_symptoms shares numbness/tingling
    - clearance_contact_email   if medical_clearance == False
"""
from typing import List, Tuple

from aqe.conditions import ConditionalLogic, ConditionKind
from aqe.model import (
    Question,
    QuestionnaireConfig,
    QuestionnaireMetadata,
    QuestionnaireSettings,
    QuestionOption,
    QuestionType,
    ScaleBounds,
    Section,
)
from aqe.rules import RuleKind, ValidationRule

PAIN_SCALE = ScaleBounds(min=0, max=10, min_label="No pain", max_label="Worst pain imaginable")


def _options(*pairs: Tuple[str, str]) -> List[QuestionOption]:
    return [QuestionOption(label=label, value=value) for label, value in pairs]


def build_discovery_questionnaire() -> QuestionnaireConfig:
    basic_info = Section(
        id="basic_info",
        title="Tell Us About Yourself",
        description="We need some basic information to personalize your recovery plan",
        questions=[
            Question(
                id="demographics",
                type=QuestionType.DEMOGRAPHICS,
                title="Personal Information",
                subtitle="This helps us create age and body-appropriate exercises",
                required=True,
                metadata={"fields": ["age", "gender", "height", "weight", "activity_level"]},
            ),
            Question(
                id="fitness_level",
                type=QuestionType.SINGLE_CHOICE,
                title="How would you describe your current fitness level?",
                required=True,
                options=_options(
                    ("Sedentary", "sedentary"),
                    ("Lightly Active", "light"),
                    ("Moderately Active", "moderate"),
                    ("Very Active", "active"),
                    ("Extremely Active", "extreme"),
                ),
            ),
            Question(
                id="previous_injuries",
                type=QuestionType.BOOLEAN,
                title="Have you had any previous injuries to this area?",
                required=True,
            ),
            Question(
                id="previous_injury_details",
                type=QuestionType.TEXT,
                title="Tell us briefly about your previous injuries",
                required=True,
                validation=[
                    ValidationRule(kind=RuleKind.MIN_LENGTH, value=3, message="Please add a little more detail"),
                    ValidationRule(kind=RuleKind.MAX_LENGTH, value=300, message="Please keep this under 300 characters"),
                ],
                conditional_logic=[
                    ConditionalLogic(depends_on="previous_injuries", condition=ConditionKind.EQUALS, value=True),
                ],
            ),
        ],
    )

    injury_details = Section(
        id="injury_details",
        title="About Your Injury",
        description="Help us understand what happened and how you're feeling",
        questions=[
            Question(
                id="affected_body_areas",
                type=QuestionType.BODY_AREAS,
                title="Which areas of your body are affected?",
                required=True,
                metadata={"max_selections": 5},
            ),
            Question(
                id="injury_type",
                type=QuestionType.SINGLE_CHOICE,
                title="What type of injury or condition do you have?",
                required=True,
                options=_options(
                    ("Acute Injury", "acute"),
                    ("Chronic Pain", "chronic"),
                    ("Overuse Injury", "overuse"),
                    ("Post-Surgery Recovery", "post_surgery"),
                    ("General Stiffness/Mobility", "mobility"),
                    ("Other/Unsure", "other"),
                ),
            ),
            Question(
                id="weeks_since_surgery",
                type=QuestionType.NUMBER,
                title="How many weeks ago was your surgery?",
                required=True,
                validation=[
                    ValidationRule(kind=RuleKind.MIN_VALUE, value=0, message="Weeks cannot be negative"),
                    ValidationRule(kind=RuleKind.MAX_VALUE, value=104, message="Please enter 104 weeks or fewer"),
                ],
                conditional_logic=[
                    ConditionalLogic(depends_on="injury_type", condition=ConditionKind.EQUALS, value="post_surgery"),
                ],
            ),
            Question(
                id="injury_duration",
                type=QuestionType.SINGLE_CHOICE,
                title="How long have you been experiencing this issue?",
                required=True,
                options=_options(
                    ("Less than 1 week", "less_1_week"),
                    ("1-2 weeks", "1_2_weeks"),
                    ("2-4 weeks", "2_4_weeks"),
                    ("1-3 months", "1_3_months"),
                    ("3-6 months", "3_6_months"),
                    ("6+ months", "6_plus_months"),
                ),
            ),
            Question(
                id="current_pain_level",
                type=QuestionType.PAIN_SCALE,
                title="What is your current pain level?",
                required=True,
                scale=PAIN_SCALE,
            ),
            Question(
                id="high_pain_support",
                type=QuestionType.BOOLEAN,
                title="Would you like us to start with pain-relief exercises only?",
                required=False,
                conditional_logic=[
                    ConditionalLogic(depends_on="current_pain_level", condition=ConditionKind.GREATER_THAN, value=7),
                ],
            ),
            Question(
                id="pain_during_activity",
                type=QuestionType.PAIN_SCALE,
                title="What is your pain level during normal daily activities?",
                required=True,
                scale=PAIN_SCALE,
            ),
        ],
    )

    symptoms = Section(
        id="symptoms",
        title="Symptoms & Limitations",
        description="Let us know how this is affecting your daily life",
        questions=[
            Question(
                id="primary_symptoms",
                type=QuestionType.MULTIPLE_CHOICE,
                title="What symptoms are you experiencing?",
                required=True,
                options=_options(
                    ("Sharp/Stabbing Pain", "sharp_pain"),
                    ("Dull/Aching Pain", "dull_pain"),
                    ("Burning Sensation", "burning"),
                    ("Stiffness", "stiffness"),
                    ("Swelling", "swelling"),
                    ("Numbness", "numbness"),
                    ("Tingling", "tingling"),
                    ("Weakness", "weakness"),
                    ("Limited Range of Motion", "limited_rom"),
                    ("Muscle Spasms", "spasms"),
                ),
                metadata={"max_selections": 8},
            ),
            Question(
                id="nerve_symptom_location",
                type=QuestionType.TEXT,
                title="Where do you feel the numbness or tingling?",
                required=False,
                conditional_logic=[
                    ConditionalLogic(
                        depends_on="primary_symptoms",
                        condition=ConditionKind.IN_ARRAY,
                        value=("numbness", "tingling"),
                    ),
                ],
            ),
            Question(
                id="daily_limitations",
                type=QuestionType.MULTIPLE_CHOICE,
                title="Which daily activities are difficult for you?",
                required=True,
                options=_options(
                    ("Getting dressed", "dressing"),
                    ("Household chores", "chores"),
                    ("Work tasks", "work"),
                    ("Exercise/sports", "exercise"),
                    ("Sleeping", "sleeping"),
                    ("Driving", "driving"),
                    ("Climbing stairs", "stairs"),
                ),
            ),
        ],
    )

    goals = Section(
        id="goals",
        title="Your Recovery Goals",
        description="What would you like to achieve through your recovery?",
        questions=[
            Question(
                id="primary_goals",
                type=QuestionType.MULTIPLE_CHOICE,
                title="What are your main recovery goals?",
                required=True,
                options=_options(
                    ("Reduce pain", "reduce_pain"),
                    ("Improve flexibility", "flexibility"),
                    ("Increase strength", "strength"),
                    ("Return to sports", "sports"),
                    ("Prevent future injury", "prevention"),
                ),
                metadata={"max_selections": 5},
            ),
            Question(
                id="time_commitment",
                type=QuestionType.SINGLE_CHOICE,
                title="How much time can you realistically commit to exercises daily?",
                required=True,
                options=_options(
                    ("5-10 minutes", "5_10_min"),
                    ("10-15 minutes", "10_15_min"),
                    ("15-30 minutes", "15_30_min"),
                    ("30-45 minutes", "30_45_min"),
                    ("45+ minutes", "45_plus_min"),
                ),
            ),
            Question(
                id="motivation_level",
                type=QuestionType.SCALE,
                title="How motivated are you to do daily exercises?",
                required=True,
                scale=ScaleBounds(min=1, max=10, min_label="Not motivated", max_label="Very motivated"),
                validation=[
                    ValidationRule(kind=RuleKind.MIN_VALUE, value=1, message="Choose a value from 1 to 10"),
                    ValidationRule(kind=RuleKind.MAX_VALUE, value=10, message="Choose a value from 1 to 10"),
                ],
            ),
        ],
    )

    medical_history = Section(
        id="medical_history",
        title="Medical History",
        description="Optional information to help us create the safest program for you",
        optional=True,
        questions=[
            Question(
                id="current_treatments",
                type=QuestionType.MULTIPLE_CHOICE,
                title="Are you currently receiving any treatments?",
                options=_options(
                    ("Physical therapy", "physical_therapy"),
                    ("Chiropractic care", "chiropractic"),
                    ("Massage therapy", "massage"),
                    ("Medication for pain", "pain_medication"),
                    ("None of the above", "none"),
                ),
            ),
            Question(
                id="medical_clearance",
                type=QuestionType.BOOLEAN,
                title="Has a healthcare provider cleared you for exercise?",
            ),
            Question(
                id="clearance_contact_email",
                type=QuestionType.TEXT,
                title="Where can we send a clearance checklist for your doctor?",
                validation=[
                    ValidationRule(kind=RuleKind.EMAIL, message="Please enter a valid email address"),
                ],
                conditional_logic=[
                    ConditionalLogic(depends_on="medical_clearance", condition=ConditionKind.EQUALS, value=False),
                ],
            ),
            Question(
                id="additional_notes",
                type=QuestionType.TEXT,
                title="Anything else you'd like us to know?",
                validation=[
                    ValidationRule(kind=RuleKind.MAX_LENGTH, value=500, message="Please keep this under 500 characters"),
                ],
                metadata={"multiline": True, "placeholder": "Share any additional details..."},
            ),
        ],
    )

    return QuestionnaireConfig(
        id="discovery_v1",
        title="Recovery Assessment",
        version="1.0.0",
        description="Help us understand your injury and create a personalized recovery plan",
        sections=[basic_info, injury_details, symptoms, goals, medical_history],
        settings=QuestionnaireSettings(
            allow_back=True,
            show_progress=True,
            auto_save=True,
            completion_message="Great! We've created your personalized recovery plan. Let's get started!",
        ),
        metadata=QuestionnaireMetadata(created_by="Recovery+ Team", tags=["discovery", "assessment", "intake"]),
    )
