"""
AI Service Module

This module handles generation operations using the OpenAI API.
It rewords a post's title and HTML body so that they carry the same meaning
without mentioning the source site, and generates a cover illustration.
"""

import re
from typing import Any, Optional

from openai import OpenAI, OpenAIError

from config import settings
from data.models import OriginalPost, ReformulatedPost, SiteConfig
from utils.exceptions import GenerationError
from utils.logger import get_logger

logger = get_logger(__name__)

TITLE_PROMPT = (
    "Ton rôle est de reformuler le titre suivant en utilisant des mots différents "
    "mais en conservant le sens de la phrase. Retire aussi toutes les mentions "
    "concernant {site_name}. Voici le titre à reformuler :"
)

CONTENT_PROMPT = (
    "Ton rôle est de reformuler intégralement le texte présent dans l'HTML suivant, "
    "en utilisant des mots différents mais en conservant le sens des phrases. "
    "Retire aussi toutes les mentions concernant {site_name}. Tu ne dois surtout pas "
    "changer la structure HTML ni le contenu CSS. Voici le texte à reformuler :"
)

THUMBNAIL_PROMPT = (
    "Génère une image de couverture pour un article de blog sur le sujet suivant : {title}"
)

_LEADING_FENCE = re.compile(r'^```html\n')
_TRAILING_FENCE = re.compile(r'```$')


def strip_code_fence(text: str) -> str:
    """
    Remove the markdown code fence a model may wrap generated HTML in.

    Drops a leading "```html" line, a trailing "```" and every newline.
    """
    text = _LEADING_FENCE.sub('', text)
    text = _TRAILING_FENCE.sub('', text)
    return text.replace('\n', '')


class AIService:
    """Service for generation operations with the OpenAI API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        image_model: Optional[str] = None,
        image_size: Optional[str] = None,
        client: Optional[Any] = None,
    ):
        """
        Initialize the AI service with an OpenAI client.

        Args:
            api_key: OpenAI API key, settings.OPENAI_API_KEY by default.
            model: Chat completion model.
            image_model: Image generation model.
            image_size: Generated image size, e.g. "1024x1024".
            client: Pre-built client (tests inject a stub here).
        """
        self.model = model or settings.OPENAI_GPT_MODEL
        self.image_model = image_model or settings.OPENAI_IMAGE_MODEL
        self.image_size = image_size or settings.OPENAI_IMAGE_SIZE

        if client is not None:
            self.client = client
            return

        api_key = api_key or settings.OPENAI_API_KEY
        if not api_key:
            raise ValueError("Missing required OPENAI_API_KEY")
        self.client = OpenAI(api_key=api_key)
        logger.info(f"Using OpenAI models {self.model} / {self.image_model}")

    def _complete(self, prompt: str) -> str:
        """
        Send a single user message and return the generated text.

        Raises:
            GenerationError: If the completion carries no text.
        """
        chat_completion = self.client.chat.completions.create(
            messages=[{"role": "user", "content": prompt}],
            model=self.model,
        )
        logger.debug(f"Chat completion: {chat_completion}")
        content = chat_completion.choices[0].message.content if chat_completion.choices else None
        if not content or not content.strip():
            raise GenerationError("Empty completion returned by the model")
        return content

    def reformulate_title(self, site_name: str, title: str) -> Optional[str]:
        """
        Reword a post title, removing any mention of the source site.

        Args:
            site_name: Display name of the source site.
            title: The original title.

        Returns:
            Optional[str]: The reworded title, or None if none was generated.
        """
        logger.info("Reformulating the post title")
        prompt = f"{TITLE_PROMPT.format(site_name=site_name)} {title}"
        try:
            reformulated_title = self._complete(prompt).strip()
        except GenerationError:
            logger.warning(f"No reformulated title generated for '{title}'")
            return None
        except OpenAIError as e:
            logger.error(f"Error reformulating title '{title}': {e}")
            return None

        logger.info(f"Reformulated title: {reformulated_title}")
        return reformulated_title

    def reformulate_content(self, site_name: str, html_content: str) -> Optional[str]:
        """
        Reword all text of an HTML body while keeping its markup and inline CSS.

        Args:
            site_name: Display name of the source site.
            html_content: The sanitized original body.

        Returns:
            Optional[str]: The reworded HTML without code fence or newlines,
            or None if none was generated.
        """
        logger.info("Reformulating the post content")
        prompt = f"{CONTENT_PROMPT.format(site_name=site_name)} {html_content}"
        try:
            reformulated_content = self._complete(prompt)
        except GenerationError:
            logger.warning("No reformulated content generated")
            return None
        except OpenAIError as e:
            logger.error(f"Error reformulating content: {e}")
            return None

        reformulated_content = strip_code_fence(reformulated_content)
        if not reformulated_content.strip():
            logger.warning("Reformulated content is empty once unwrapped")
            return None

        logger.debug(f"Reformulated content: {reformulated_content}")
        return reformulated_content

    def reformulate_post(self, site: SiteConfig, post: OriginalPost) -> Optional[ReformulatedPost]:
        """
        Reword a post's title then its body.

        Both must succeed; a post is never partially reformulated.

        Returns:
            Optional[ReformulatedPost]: The reworded post without thumbnail, or None.
        """
        logger.info(f"[{site.id}] Reformulating the post '{post.title}'")
        title = self.reformulate_title(site.name, post.title)
        if not title:
            return None

        html_content = self.reformulate_content(site.name, post.html_content)
        if not html_content:
            return None

        return ReformulatedPost(title=title, html_content=html_content)

    def generate_thumbnail(self, title: str) -> Optional[str]:
        """
        Generate a cover illustration for a post.

        Args:
            title: The reworded post title used as subject.

        Returns:
            Optional[str]: URL of the generated image, or None if unavailable.
        """
        logger.info(f"Generating the post thumbnail for '{title}'")
        try:
            response = self.client.images.generate(
                model=self.image_model,
                prompt=THUMBNAIL_PROMPT.format(title=title),
                n=1,
                size=self.image_size,
            )
        except OpenAIError as e:
            logger.error(f"Error generating thumbnail for '{title}': {e}")
            return None

        image_url = response.data[0].url if response.data else None
        if not image_url:
            logger.warning(f"No thumbnail URL returned for '{title}'")
            return None

        logger.info(f"Thumbnail generated: {image_url}")
        return image_url
