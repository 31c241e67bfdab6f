"""
Testes Unitários - WeatherApiDataMapper
"""
import zlib

from infrastructure.adapters.output.providers.weatherapi.mappers import WeatherApiDataMapper


class TestMapForecastResponse:
    def test_drops_sections_outside_weather_payload(self, weatherapi_samples):
        result = WeatherApiDataMapper.map_forecast_response(weatherapi_samples['london_forecast'])

        assert 'alerts' not in result
        assert result['current']['temp_c'] == 9.0

    def test_missing_sections_are_omitted(self):
        assert WeatherApiDataMapper.map_forecast_response({'location': {'name': 'X'}}) == {'location': {'name': 'X'}}


class TestMapSearchResponse:
    def test_fallback_id_is_crc32(self, weatherapi_samples):
        result = WeatherApiDataMapper.map_search_response(weatherapi_samples['london_search'])

        expected = zlib.crc32('Londonderry|New Hampshire|United States of America'.encode('utf-8'))
        assert result[2].id == expected
        assert result[2].id == WeatherApiDataMapper.fallback_id('Londonderry', 'New Hampshire', 'United States of America')

    def test_items_without_name_are_skipped(self):
        result = WeatherApiDataMapper.map_search_response([{'id': 1}, {'id': 2, 'name': 'Paris', 'lat': 48.87, 'lon': 2.33}])

        assert [s.name for s in result] == ['Paris']
        assert result[0].region == ''

    def test_non_list_response(self):
        assert WeatherApiDataMapper.map_search_response({'error': {}}) == []
        assert WeatherApiDataMapper.map_search_response(None) == []


class TestExtractErrorMessage:
    def test_reads_nested_message(self, weatherapi_samples):
        assert WeatherApiDataMapper.extract_error_message(weatherapi_samples['invalid_key_error']) == "API key is invalid."

    def test_unknown_shapes(self):
        assert WeatherApiDataMapper.extract_error_message(None) is None
        assert WeatherApiDataMapper.extract_error_message({'error': 'text'}) is None
