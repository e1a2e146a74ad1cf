VALUE_PROPOSITION_PROMPT = """\
Crea una value proposition di 80 parole per questa startup da presentare all'acceleratore.

STARTUP: {startup}

ACCELERATORE: {accelerator}

Scrivi solo la value proposition, senza introduzioni."""

# Built-in pair used by the quick connectivity test
SAMPLE_STARTUP = (
    "Piattaforma SaaS per automatizzare il recruiting con AI. Aiuta le aziende a scremare "
    "migliaia di CV in pochi minuti usando machine learning."
)
SAMPLE_ACCELERATOR = "Focus su B2B SaaS e AI. Programma di 3 mesi con mentorship e €100k investimento."


def build_value_proposition_prompt(startup: str, accelerator: str) -> str:
    return VALUE_PROPOSITION_PROMPT.format(startup=startup, accelerator=accelerator)
