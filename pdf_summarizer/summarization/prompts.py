"""
Prompt templates for each summarization stage, keyed by language.

Three stages use the model:
- chunk: key points of one chunk of a long document
- final: integrate the chunk summaries into one summary of ~max_length
- single: summarize a short document in one pass
"""

CHUNK_TEMPLATES = {
    'ja': """以下のテキストの要点を簡潔にまとめてください。重要な情報を漏らさないようにしてください。

テキスト:
{text}

要点:""",
    'en': """Summarize the key points of the following text concisely. Do not miss important information.

Text:
{text}

Key points:""",
}

FINAL_TEMPLATES = {
    'ja': """以下は文書の各部分の要約です。これらを統合して、{max_length}文字程度の包括的な要約を作成してください。

各部分の要約:
{summaries}

最終要約:""",
    'en': """The following are summaries of different parts of a document. Create a comprehensive summary of approximately {max_length} words by integrating these parts.

Part summaries:
{summaries}

Final summary:""",
}

SINGLE_TEMPLATES = {
    'ja': """以下のテキストを{max_length}文字程度で簡潔に要約してください。重要なポイントを漏らさず、分かりやすい日本語で要約してください。

テキスト:
{text}

要約:""",
    'en': """Please summarize the following text in approximately {max_length} words. Focus on the key points and make it clear and concise.

Text:
{text}

Summary:""",
}


def build_chunk_prompt(chunk: str, language: str) -> str:
    return CHUNK_TEMPLATES[language].format(text=chunk)


def build_final_prompt(combined_summaries: str, language: str, max_length: int) -> str:
    return FINAL_TEMPLATES[language].format(summaries=combined_summaries, max_length=max_length)


def build_single_prompt(text: str, language: str, max_length: int) -> str:
    return SINGLE_TEMPLATES[language].format(text=text, max_length=max_length)


def user_message(prompt: str) -> list[dict[str, str]]:
    """Wrap a prompt as a single-turn chat message list."""
    return [{"role": "user", "content": prompt}]
