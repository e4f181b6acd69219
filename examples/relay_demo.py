"""Minimal demonstration of the message relay without HTTP."""

from relay_core.api.service import run_chat

if __name__ == "__main__":
    history = [
        {"role": "user", "content": "I have three exams next week."},
        {"role": "assistant", "content": "That sounds like a lot. How are you feeling about them?"},
    ]
    question = "Honestly I can't focus and I keep panicking."
    result = run_chat(question, history)
    print("User:", question)
    print("Relay:", result["body"]["reply"])
