# Services package init
"""
LexiNote Backend — Services Layer
===================================

What:  Business logic between routes (HTTP) and the database.

Service Inventory:
    - LLMService (abstract): one LLM vendor reachable over HTTP
    - OpenAIService / GeminiService / AnthropicService: the three vendor adapters
    - AIService: dispatch facade routing tasks by the provider's vendor tag
    - response_parser: comma-list and hardWords JSON parsing of vendor replies
    - NoteService: notes and hard-word replacement history
    - ProviderService: stored Provider Configs and the active provider
"""
