"""
home_finder/enrichment/features/crime_agent/prompts.py

Defines the system prompt and user prompt template for the CrimeAgent.
Edit these to adjust tone or length of the safety summaries without touching
the agent logic.
"""

# The system prompt sets the analyst persona and output style.
SYSTEM_PROMPT = (
    "You are a crime and safety analyst. Your job is to find the latest crime "
    "statistics and safety information for a given location. Provide a brief, "
    "easy-to-read summary."
)

# User prompt; formatted with the city name
USER_PROMPT_TEMPLATE = "Research the crime and safety statistics for {city}."
