"""Built-in sample tree used by the demo script and smoke tests."""

DATABASE_SELECTION = {
    "id": "database-selection",
    "title": "Choose a Database",
    "description": "Pick a primary datastore for a new service.",
    "version": "1.0.0",
    "questions": [
        {
            "id": "data-shape",
            "text": "What does your data look like?",
            "options": [
                {
                    "id": "relational",
                    "label": "Structured records with relationships",
                    "nextQuestionId": "consistency",
                    "scores": {"postgresql": 4, "mongodb": 1, "dynamodb": 1},
                },
                {
                    "id": "documents",
                    "label": "Nested documents with a flexible schema",
                    "nextQuestionId": "scale",
                    "scores": {"postgresql": 1, "mongodb": 4, "dynamodb": 2},
                },
                {
                    "id": "key-value",
                    "label": "Simple key-value lookups",
                    "nextQuestionId": "scale",
                    "scores": {"postgresql": 0, "mongodb": 1, "dynamodb": 4},
                },
            ],
        },
        {
            "id": "consistency",
            "text": "Do you need multi-row transactions?",
            "options": [
                {
                    "id": "strict",
                    "label": "Yes, strong consistency is required",
                    "nextQuestionId": None,
                    "scores": {"postgresql": 4, "mongodb": 1, "dynamodb": 0},
                },
                {
                    "id": "relaxed",
                    "label": "No, eventual consistency is fine",
                    "nextQuestionId": "scale",
                    "scores": {"postgresql": 1, "mongodb": 2, "dynamodb": 2},
                },
            ],
        },
        {
            "id": "scale",
            "text": "What scale do you expect in the first year?",
            "options": [
                {
                    "id": "modest",
                    "label": "Thousands of requests per minute",
                    "nextQuestionId": None,
                    "scores": {"postgresql": 3, "mongodb": 2, "dynamodb": 1},
                },
                {
                    "id": "massive",
                    "label": "Millions of requests per minute",
                    "nextQuestionId": None,
                    "scores": {"postgresql": 0, "mongodb": 2, "dynamodb": 4},
                },
            ],
        },
    ],
    "results": {
        "postgresql": {
            "name": "PostgreSQL",
            "reasoning": "Relational data with transactional guarantees fits a mature SQL database.",
            "tradeoffs": ["Horizontal write scaling needs extra tooling", "Schema changes need migrations"],
            "whenToReconsider": "Write volume outgrows a single primary.",
            "bestFor": "Business applications with related entities",
        },
        "mongodb": {
            "name": "MongoDB",
            "reasoning": "Document-shaped data maps directly onto collections without joins.",
            "tradeoffs": ["Cross-document transactions are costlier", "Schema drift needs discipline"],
            "whenToReconsider": "Relationships between documents start to dominate queries.",
            "bestFor": "Content and catalog data with varied shapes",
        },
        "dynamodb": {
            "name": "DynamoDB",
            "reasoning": "Predictable key-based access at very high scale suits a managed key-value store.",
            "tradeoffs": ["Access patterns must be designed up front", "Ad-hoc queries are limited"],
            "whenToReconsider": "You need flexible querying or analytics on the primary store.",
            "bestFor": "High-throughput lookups by key",
        },
    },
}

SAMPLE_TREES = [DATABASE_SELECTION]
