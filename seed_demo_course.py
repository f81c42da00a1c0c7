"""Creates the tables and stores the demo bar-scenario course."""
import logging

from phrasecoach.core.config.settings import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

settings.ensure_dirs()

from phrasecoach.core.database.connection import init_db
from phrasecoach.features.courses.domain.models import CourseRequest, PhraseDraft
from phrasecoach.features.courses.service.api import CourseService

DEMO_PHRASES = [
    ("Pourriez-vous recommander une bière locale ?", "Could you recommend a local brew?"),
    ("Je voudrais une bière, s'il vous plaît.", "I would like a beer, please."),
    ("Où est la carte des boissons ?", "Where is the drink menu?"),
    ("J'aimerais un verre de vin rouge.", "I would like a glass of red wine."),
    ("Pouvez-vous me recommander un cocktail spécial ?", "Can you recommend a special cocktail?"),
    ("Combien coûte une bouteille d'eau minérale ?", "How much does a bottle of mineral water cost?"),
    ("Est-ce que vous servez des snacks ici ?", "Do you serve snacks here?"),
    ("Pouvez-vous allumer la télévision pour le match de football ?", "Can you turn on the TV for the football game?"),
    ("Je vais payer l'addition.", "I will pay the bill."),
    ("C'est l'heure de fermeture.", "It's closing time."),
]


def seed() -> int:
    init_db()

    request = CourseRequest(
        title="You are at a bar...",
        language_name="French",
        language_code="fr-FR",
        scenario_description="You are at a new bar and are about to spend the night there.",
        phrases=[
            PhraseDraft(expected_text=fr, native_text=en, audio_ref=f"assets/audio/{i}.m4a")
            for i, (fr, en) in enumerate(DEMO_PHRASES, start=1)
        ],
    )
    course_id = CourseService().create_course(request)
    logger.info(f"Demo course stored with ID {course_id} in {settings.DATABASE_URL}")
    return course_id


if __name__ == "__main__":
    seed()
