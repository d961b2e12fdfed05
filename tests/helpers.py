from datetime import date

TODAY = date(2026, 10, 16)

WORDS = [
    "apple", "bacon", "badge", "bingo", "blaze", "cabin", "chair", "crane",
    "dance", "eagle", "flame", "grape", "house", "jolly", "lemon", "mango",
    "ocean", "piano", "queen", "river", "stone", "tiger", "umbra", "vivid",
    "whale", "zebra",
]
SECRETS = ["bingo", "mango"]


def auth_headers(client) -> dict:
    token = client.post("/api/v1/session").json()["token"]
    return {"Authorization": f"Bearer {token}"}
