# chainchat/utils/preprocess.py


def normalize_message(text: str) -> str:
    """
    Lowercases the input text. Digits, whitespace and punctuation are kept as-is
    since the intent patterns match on them.
    """
    return text.lower()
