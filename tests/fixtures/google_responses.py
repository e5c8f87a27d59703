# ABOUTME: Canned Google Books API response fixtures for testing.
# ABOUTME: Provides realistic JSON dicts matching the volumes endpoint response shape.

CLEAN_CODE_VOLUME = {
    "kind": "books#volume",
    "id": "_i6bDeoCQzsC",
    "volumeInfo": {
        "title": "Clean Code",
        "subtitle": "A Handbook of Agile Software Craftsmanship",
        "authors": ["Robert C. Martin"],
        "publisher": "Pearson Education",
        "publishedDate": "2008-08-01",
        "description": "Even bad code can function. But if code isn't clean, it can bring a "
        "development organization to its knees.",
        "industryIdentifiers": [
            {"type": "ISBN_10", "identifier": "0132350882"},
            {"type": "ISBN_13", "identifier": "9780132350884"},
        ],
        "pageCount": 464,
        "categories": ["Computers"],
        "imageLinks": {
            "smallThumbnail": "http://books.google.com/books/content?id=_i6bDeoCQzsC&zoom=5",
            "thumbnail": "http://books.google.com/books/content?id=_i6bDeoCQzsC&zoom=1",
        },
        "language": "en",
        "infoLink": "http://books.google.com/books?id=_i6bDeoCQzsC&dq=clean+code",
    },
}

CLEAN_CODER_VOLUME = {
    "kind": "books#volume",
    "id": "ik0qEAAAQBAJ",
    "volumeInfo": {
        "title": "The Clean Coder",
        "authors": ["Robert C. Martin"],
        "publishedDate": "2011",
        "industryIdentifiers": [{"type": "ISBN_13", "identifier": "9780137081073"}],
        "language": "en",
    },
}

REFACTORING_VOLUME = {
    "kind": "books#volume",
    "id": "HmrDHwgkbPsC",
    "volumeInfo": {
        "title": "Refactoring",
        "authors": ["Martin Fowler"],
        "publishedDate": "2018-11-20",
        "description": "Improving the design of existing code.",
        "imageLinks": {"smallThumbnail": "http://books.google.com/books/content?id=HmrD&zoom=5"},
        "language": "en",
    },
}

UNTITLED_VOLUME = {
    "kind": "books#volume",
    "id": "untitled01",
    "volumeInfo": {"authors": ["Nobody"]},
}

VOLUMES_RESPONSE = {
    "kind": "books#volumes",
    "totalItems": 2,
    "items": [CLEAN_CODE_VOLUME, CLEAN_CODER_VOLUME],
}

VOLUMES_RESPONSE_WITH_DUPLICATE = {
    "kind": "books#volumes",
    "totalItems": 3,
    "items": [CLEAN_CODE_VOLUME, CLEAN_CODER_VOLUME, CLEAN_CODE_VOLUME],
}

VOLUMES_RESPONSE_WITH_UNTITLED = {
    "kind": "books#volumes",
    "totalItems": 2,
    "items": [UNTITLED_VOLUME, REFACTORING_VOLUME],
}

# Google omits "items" entirely when nothing matched
VOLUMES_RESPONSE_EMPTY = {
    "kind": "books#volumes",
    "totalItems": 0,
}
