"""Built-in seed catalog.

Seed records are never persisted. Their ids use the ``<kind>_<n>`` form,
which cannot collide with generated ``user_<epoch-ms>`` ids.
"""

from shelf_contracts import Book, Collection, MediaRecord, Video

SEED_BOOKS = (
    Book(
        id="book_1",
        title="The Art of Reading",
        author="Mortimer J. Adler",
        description="A classic guide to reading comprehension and analytical reading.",
        image_url="https://placehold.co/400x600/1e3a8a/ffffff?text=Reading",
        community_rating=4.5,
        rating_count=128,
        categories=["Education", "Reading"],
    ),
    Book(
        id="book_2",
        title="A Brief History of Time",
        author="Stephen Hawking",
        description="From the Big Bang to black holes, an introduction to cosmology.",
        image_url="https://placehold.co/400x600/312e81/ffffff?text=Cosmos",
        community_rating=4.7,
        rating_count=342,
        categories=["Science", "Physics"],
    ),
    Book(
        id="book_3",
        title="Thinking, Fast and Slow",
        author="Daniel Kahneman",
        description="The two systems that drive the way we think and make choices.",
        image_url="https://placehold.co/400x600/7c2d12/ffffff?text=Thinking",
        community_rating=4.4,
        rating_count=215,
        categories=["Psychology", "Science"],
    ),
    Book(
        id="book_4",
        title="Collected Short Stories",
        description="An anthology of short fiction.",
        image_url="https://placehold.co/400x600/334155/ffffff?text=Stories",
        categories=["Fiction"],
    ),
)

SEED_RESEARCHES = (
    Book(
        id="research_1",
        title="Attention Is All You Need",
        author="Vaswani et al.",
        description="Introduces the Transformer, an architecture based solely on attention.",
        image_url="https://placehold.co/400x600/0f766e/ffffff?text=Research",
        community_rating=4.9,
        rating_count=57,
        categories=["Machine Learning", "Science"],
    ),
    Book(
        id="research_2",
        title="The Structure of Scientific Revolutions",
        author="Thomas S. Kuhn",
        description="An essay on paradigm shifts in the history of science.",
        image_url="https://placehold.co/400x600/0f766e/ffffff?text=Research",
        community_rating=4.3,
        rating_count=31,
        categories=["History", "Science"],
    ),
)

SEED_PERIODICALS = (
    Book(
        id="periodical_1",
        title="Science Monthly, Issue 12",
        description="Monthly digest of discoveries across the natural sciences.",
        image_url="https://placehold.co/400x600/4338ca/ffffff?text=Periodical",
        community_rating=4.0,
        rating_count=12,
        categories=["Science"],
    ),
    Book(
        id="periodical_2",
        title="Literary Review, Spring",
        description="Essays, criticism and new poetry.",
        image_url="https://placehold.co/400x600/4338ca/ffffff?text=Periodical",
        categories=["Literature"],
    ),
)

SEED_VIDEOS = (
    Video(
        id="video_1",
        title="How to Read a Book Effectively",
        description="Practical techniques for active reading.",
        thumbnail_url="https://placehold.co/400x600/334155/ffffff?text=Video",
        community_rating=4.6,
        rating_count=89,
        categories=["Education", "Reading"],
    ),
    Video(
        id="video_2",
        title="The Universe in Ten Minutes",
        description="A short tour of the observable universe.",
        thumbnail_url="https://placehold.co/400x600/334155/ffffff?text=Video",
        community_rating=4.2,
        rating_count=44,
        categories=["Science", "Physics"],
    ),
)

SEED_CATALOG: dict[Collection, tuple[MediaRecord, ...]] = {
    Collection.BOOKS: SEED_BOOKS,
    Collection.RESEARCHES: SEED_RESEARCHES,
    Collection.PERIODICALS: SEED_PERIODICALS,
    Collection.VIDEOS: SEED_VIDEOS,
    Collection.AUDIOS: (),
    Collection.IMAGES: (),
}


def seed_records(collection: Collection) -> tuple[MediaRecord, ...]:
    return SEED_CATALOG.get(Collection(collection), ())


def featured_records() -> list[MediaRecord]:
    """Records highlighted on the front page: two books and a video."""
    picks = (SEED_BOOKS[:1], SEED_VIDEOS[:1], SEED_BOOKS[1:2])
    return [record for pick in picks for record in pick]
