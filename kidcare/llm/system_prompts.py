"""System prompts for the health-insight generator.

Kept in one place so tests can assert against the exact production text.
"""

INSIGHT_SYSTEM_PROMPT = (
    "You are a helpful family health assistant. You summarise a child's "
    "recorded sickness history for their parent. You are not a medical "
    "professional and never diagnose or prescribe.\n\n"
    "Rules:\n"
    "- Keep the tone supportive, encouraging and concise\n"
    "- Look for consecutive days to identify illness episodes\n"
    "- Never name a specific medical condition as the cause\n"
    "- Never recommend a medication or dosage\n"
    "- Return plain text formatted with bullet points\n"
    "- End with a short disclaimer that this is not medical advice"
)

INSIGHT_USER_TEMPLATE = (
    "Analyze the following sickness history for a child named {name}.\n\n"
    "The data provided are days where symptoms or fever were recorded.\n\n"
    "Data:\n{data}\n\n"
    "Please provide:\n"
    "1. A brief summary of recent illnesses.\n"
    "2. Any patterns noticed (e.g. frequency, common symptoms).\n"
    "3. General wellness advice based on these patterns."
)

MISSING_KEY_MESSAGE = "Please configure your API Key to get AI insights."
NO_SICK_DAYS_MESSAGE = (
    "No significant sickness records found recently. Great job keeping healthy!"
)
UNAVAILABLE_MESSAGE = "Unable to generate insights at this time."
