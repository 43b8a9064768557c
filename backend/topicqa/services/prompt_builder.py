"""
Prompts sent to the LLM for query validation and for answering
"""


def build_validation_prompt(topic: str, language: str, user_input: str) -> str:
    """
    Ask the model whether the query belongs to the topic.

    The last line of the reply is parsed as the verdict, so the prompt
    asks for a bare yes/no.
    """
    return (
        f"Be concise, respond only in {language}. "
        f"Is the following query related to \"{topic}\"? "
        f"Respond with \"yes\" or \"no\". "
        f"Query: {user_input}"
    )


def build_answer_prompt(topic: str, language: str, reference_text: str, user_input: str) -> str:
    """
    Build the answer prompt grounded in the reference text.

    `topic` is unused here: off-topic queries are filtered before this
    prompt is built. Reference text and query are inserted verbatim.
    """
    return (
        f"Directives: Be as brief and concise as possible, language only {language}. "
        f"Data:{reference_text}. "
        f"Query:{user_input}."
    )
