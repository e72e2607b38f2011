"""
시뮬레이터 기본 설정값
"""

# 큐 레벨 수 (0: 최상위)
DEFAULT_NUM_LEVELS = 3

# 레벨별 타임 퀀텀
DEFAULT_TIME_QUANTA = [2, 4, 8]

# 우선순위 부스트 주기 (시간 단위)
BOOST_INTERVAL = 100

# 무한 루프 방지용 시뮬레이션 시간 한계
SIMULATION_TIMEOUT = 10000
