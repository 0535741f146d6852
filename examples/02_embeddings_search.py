"""
Semantic search: embed a few documents with Cohere and rank them against a query.

Prerequisites: COHERE_API_KEY
    pip install toolwire

Run:
    python examples/02_embeddings_search.py
"""

from toolwire.providers import cohere

DOCUMENTS = [
    "The Eiffel Tower is in Paris.",
    "Photosynthesis converts light into chemical energy.",
    "Python is a popular programming language.",
    "The Louvre is the world's most-visited museum.",
]


def main() -> None:
    client = cohere.Client.from_env()

    corpus = client.embeddings(cohere.EMBED_ENGLISH_V3, "search_document").documents(DOCUMENTS).build()
    [query] = client.embedding_model(cohere.EMBED_ENGLISH_V3, "search_query").embed_texts(
        ["Famous landmarks in France"]
    )

    ranked = sorted(corpus, key=lambda doc: query.cosine_similarity(doc), reverse=True)
    for doc in ranked:
        print(f"{query.cosine_similarity(doc):.3f}  {doc.document}")

    client.close()


if __name__ == "__main__":
    main()
