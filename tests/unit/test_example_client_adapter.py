import json

from rfp_analyzer.llm.example_client_adapter import ExampleClientAdapter
from rfp_analyzer.llm.prompts import NOT_SPECIFIED, build_answer_schema


def _complete(json_schema: dict | None) -> str:
    return ExampleClientAdapter().create_chat_completion(
        model="example",
        temperature=0.1,
        top_p=0.9,
        max_tokens=100,
        messages=[{"role": "user", "content": "anything"}],
        json_schema=json_schema,
    )


class TestExampleClientAdapter:
    def test_answers_every_schema_property(self) -> None:
        questions = ["Go Live deadline", "Budget by Client"]
        payload = json.loads(_complete(build_answer_schema(questions)))
        assert payload == {question: NOT_SPECIFIED for question in questions}

    def test_free_text_returns_fixed_reply(self) -> None:
        assert _complete(None) == ExampleClientAdapter.CHAT_REPLY
