"""Сервис поиска туров: валидация запроса, источник предложений, фильтрация и ранжирование."""
