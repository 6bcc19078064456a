"""
Product page scraping.

Pulls a title and product images out of an arbitrary shop page by trying
meta tags first and a list of common storefront selectors after that.
"""
import logging
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup
from flask import current_app

from navandex.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/112.0.0.0 Safari/537.36"
)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp")

TITLE_SELECTORS = [
    'meta[property="og:title"]',
    'meta[name="title"]',
    "h1",
    '[data-testid="product-title"]',
    ".product-title",
    ".product-name",
    '[itemprop="name"]',
    "#product-name",
    ".title",
]

IMAGE_SELECTORS = [
    'meta[property="og:image"]',
    'meta[name="twitter:image"]',
    'meta[property="product:image"]',
    ".product-image img",
    ".product-gallery img",
    ".product__image img",
    "#product-image",
    "[data-product-image]",
    "[data-product-photo]",
    'img[src*="product"]',
    'img[src*="products"]',
    ".gallery img",
]


def is_valid_image_url(url: str) -> bool:
    path = url.lower().split("?", 1)[0]
    return path.endswith(IMAGE_EXTENSIONS)


def extract_title(soup: BeautifulSoup) -> str:
    for selector in TITLE_SELECTORS:
        element = soup.select_one(selector)
        if element is None:
            continue
        if element.name == "meta":
            title = (element.get("content") or "").strip()
        else:
            title = element.get_text(strip=True)
        if title:
            return title

    if soup.title and soup.title.string:
        return soup.title.string.strip()
    return ""


def extract_images(soup: BeautifulSoup, base_url: str) -> list:
    for selector in IMAGE_SELECTORS:
        images = []
        for element in soup.select(selector):
            if element.name == "meta":
                src = element.get("content")
            else:
                src = element.get("src") or element.get("data-src") or element.get("data-lazy-src")
            if not src:
                continue
            absolute = urljoin(base_url, src)
            if is_valid_image_url(absolute) and absolute not in images:
                images.append(absolute)
        if images:
            return images
    return []


class ScraperService:
    @staticmethod
    def fetch(url: str) -> str:
        timeout = current_app.config.get("SCRAPER_TIMEOUT", 15)
        try:
            response = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.warning(f"Scraping {url} failed: {e}")
            raise ExternalServiceError("Failed to scrape product information")
        return response.text

    @staticmethod
    def scrape_product(url: str) -> dict:
        """Return ``{"title": str, "images": [str]}`` for a product page"""
        soup = BeautifulSoup(ScraperService.fetch(url), "html.parser")
        return {"title": extract_title(soup), "images": extract_images(soup, url)}

    @staticmethod
    def try_scrape(url: str) -> dict:
        """Best effort variant used while creating orders"""
        try:
            return ScraperService.scrape_product(url)
        except ExternalServiceError:
            return {"title": "", "images": []}
