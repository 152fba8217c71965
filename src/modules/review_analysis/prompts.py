"""
Prompt templates for the review analysis pipeline.

Reviews and sentiments are rendered 1-based ("1. ...") for readability;
every index the model returns is read back as 0-based.
"""

from textwrap import dedent
from typing import Dict, Optional, Tuple

from .constants import Locale, PromptStage, STAGE_SAMPLING
from .schemas import PromptSpec, ReviewBatch, SentimentAssignment

RESULT_SCHEMA_EN = dedent("""
{{
  "totalCount": number,
  "positiveCount": number,
  "negativeCount": number,
  "positive": %, // percentage of positive reviews
  "negative": %, // percentage of negative reviews
  "keywords": [
    {{ "keyword": "...", "sentiment": "positive" | "negative", "count": number, "reviewIndices": [number, ...], "aspect": "..." }}
  ]
}}
""").strip()

COMBINED_PROMPT_EN = dedent("""
Analyze the following reviews and return only JSON in this format (no explanation, no greeting, no code block):

{schema}

Instructions:
1. For each review, decide if it is positive or negative. There is no neutral option.
2. Count the total number of reviews, and the number of positive and negative reviews.
3. Extract concise, meaningful aspects or features from the reviews as keywords. A keyword must be more specific than just "quality" or "service", but not as detailed as "beautiful color" or "nice wood scent". Good keywords: "build quality", "delivery speed", "assembly instructions", "customer service", "durability", "design", "comfort", "price".
4. Merge similar or related detailed keywords into a single concise aspect. Return the aspect as the keyword and count how many reviews mention it.
5. Remove stopwords and filter out generic or irrelevant terms.
6. For each keyword, return a "reviewIndices" array with the indices (0-based) of the reviews most related to that keyword.
7. Sort keywords in descending order of count within each sentiment group.
8. Return only the top keywords for each sentiment in the "keywords" array, with their sentiment, count, reviewIndices and aspect.
9. A single review may mention several aspects. Extract every relevant keyword from each review.

Reviews list:
{reviews}
""").strip()

SENTIMENT_PROMPT_KO = dedent("""
아래 리뷰들을 각각 읽고, 긍정 또는 부정으로만 분류하세요. 중립은 없습니다.
리뷰 순서(1번부터 {count}번까지)와 같은 순서로, 정확히 {count}개의 결과를 반환하세요.
설명 없이 JSON만 반환하세요.
JSON 예시: {{"sentiments": ["positive", "negative", ...]}}

리뷰 목록:
{reviews}
""").strip()

KEYWORD_PROMPT_KO = dedent("""
아래는 각 리뷰와 그 감성(긍정/부정) 결과입니다. 각 리뷰에서 의미 있는 키워드를 추출하고, 해당 감성에 따라 분류하세요.
설명 없이 JSON만 반환하세요.
JSON 예시:
{{
  "totalCount": 전체 리뷰 개수,
  "positiveCount": 긍정 리뷰 개수,
  "negativeCount": 부정 리뷰 개수,
  "positive": %, "negative": %,
  "keywords": [
    {{ "keyword": "...", "sentiment": "positive"|"negative", "count": 개수, "reviewIndices": [번호, ...], "aspect": "..." }}
  ]
}}
지침:
- 각 리뷰의 감성(긍정/부정)은 이미 주어졌습니다. 감성을 다시 판단하지 말고, 주어진 감성에 따라 키워드를 분류하세요.
- 의미 있는 키워드만 추출하세요. 너무 포괄적이거나 너무 세부적이면 안 됩니다.
- 유사 키워드는 하나로 묶으세요.
- 예시: "고기", "반찬", "환기", "청결", "가격", "A/S", "내구성", "조립 난이도"
- 키워드의 긍정, 부정은 반드시 문장 전체 의미로 판단하세요.
- 각 감성 그룹 안에서 키워드를 개수(count) 내림차순으로 정렬하세요.
- 각 키워드별로 관련 리뷰 인덱스(0부터 시작)를 "reviewIndices"에 반환하세요.

리뷰 목록:
{reviews}

감성 결과:
{sentiments}
""").strip()

SYSTEM_MESSAGES: Dict[Tuple[Locale, PromptStage], str] = {
    (Locale.EN, PromptStage.COMBINED): "You are a helpful assistant for review sentiment analysis.",
    (Locale.KO, PromptStage.SENTIMENT): "당신은 리뷰 감성 분석을 도와주는 한국어 AI 어시스턴트입니다.",
    (Locale.KO, PromptStage.KEYWORDS): "당신은 키워드 분석을 도와주는 AI 어시스턴트입니다.",
}


def build_prompt(
    batch: ReviewBatch,
    locale: Locale,
    stage: PromptStage,
    sentiments: Optional[SentimentAssignment] = None,
) -> PromptSpec:
    """
    Build the prompt for one inference call.

    Args:
        batch: Reviews to analyze
        locale: Prompt language
        stage: Which instruction block to render
        sentiments: First-pass result, required for the keywords stage

    Returns:
        PromptSpec with system message, prompt text and sampling parameters

    Raises:
        ValueError: If the locale has no template for the stage, or the
            keywords stage is requested without sentiments
    """
    key = (locale, stage)
    if key not in SYSTEM_MESSAGES:
        raise ValueError(f"No {stage.value} prompt for locale '{locale.value}'")

    if stage == PromptStage.COMBINED:
        prompt = COMBINED_PROMPT_EN.format(
            schema=RESULT_SCHEMA_EN.format(),
            reviews=batch.numbered(),
        )
    elif stage == PromptStage.SENTIMENT:
        prompt = SENTIMENT_PROMPT_KO.format(count=len(batch), reviews=batch.numbered())
    else:
        if sentiments is None:
            raise ValueError("Keyword prompt requires first-pass sentiments")
        prompt = KEYWORD_PROMPT_KO.format(
            reviews=batch.numbered(),
            sentiments=sentiments.numbered(),
        )

    temperature, max_tokens = STAGE_SAMPLING[stage]
    return PromptSpec(
        stage=stage,
        system=SYSTEM_MESSAGES[key],
        prompt=prompt,
        temperature=temperature,
        max_tokens=max_tokens,
    )
