"""Slack 메시지 유틸리티"""

SLACK_MAX_MESSAGE_LENGTH = 3900


def split_long_message(text: str, max_length: int = SLACK_MAX_MESSAGE_LENGTH) -> list[str]:
    """긴 메시지를 줄 단위로 분할

    분할되면 각 조각 앞에 "(i/n)" 접두어를 붙입니다.
    """
    if len(text) <= max_length:
        return [text]

    # 줄 단위로 분할
    lines = text.split("\n")
    chunks = []
    current_chunk = ""

    for line in lines:
        if len(current_chunk) + len(line) + 1 > max_length:
            if current_chunk:
                chunks.append(current_chunk)
            current_chunk = line
        else:
            current_chunk = current_chunk + "\n" + line if current_chunk else line

    if current_chunk:
        chunks.append(current_chunk)

    if len(chunks) == 1:
        return chunks
    return [f"({i+1}/{len(chunks)})\n{chunk}" for i, chunk in enumerate(chunks)]
