"""
입력 데이터 파서 및 프로세스 생성 모듈
"""

import random
from typing import List
from core.process import Process


class InputParser:
    """입력 파일 파서"""

    @staticmethod
    def parse_file(filename: str) -> List[Process]:
        """
        파일에서 프로세스 정보 읽기

        파일 형식: PID,우선순위,총작업시간
        예: 1,0,15

        Args:
            filename: 입력 파일 경로

        Returns:
            프로세스 리스트
        """
        processes = []

        try:
            with open(filename, 'r', encoding='utf-8') as f:
                for line in f:
                    line = line.strip()

                    # 주석 및 빈 줄 제거
                    if not line or line.startswith('#'):
                        continue

                    try:
                        parts = InputParser._parse_line(line)
                        processes.append(InputParser._create_process_from_parts(parts))
                    except ValueError as e:
                        print(f"경고: 라인 파싱 실패: {line}")
                        print(f"오류: {e}")
                        continue

            print(f"{filename}에서 {len(processes)}개의 프로세스를 성공적으로 로드했습니다")
            return processes

        except FileNotFoundError:
            print(f"오류: 파일 '{filename}'을 찾을 수 없습니다")
            return []

    @staticmethod
    def _parse_line(line: str) -> List[str]:
        """CSV 라인 파싱 (줄 끝 주석 제거)"""
        line = line.split('#', 1)[0]
        return [part.strip() for part in line.split(',')]

    @staticmethod
    def _create_process_from_parts(parts: List[str]) -> Process:
        """파싱된 부분에서 프로세스 객체 생성"""
        if len(parts) != 3:
            raise ValueError(f"잘못된 형식: 3개 필드가 필요하지만 {len(parts)}개가 있습니다")

        try:
            pid = int(parts[0])
            priority = int(parts[1])
            total_work = int(parts[2])
        except ValueError as e:
            raise ValueError(f"숫자 필드 변환 오류: {e}")

        # 검증
        if pid <= 0:
            raise ValueError(f"PID는 양수여야 합니다: {pid}")
        if priority < 0:
            raise ValueError(f"우선순위는 0 이상이어야 합니다: {priority}")
        if total_work <= 0:
            raise ValueError(f"총 작업 시간은 양수여야 합니다: {total_work}")

        return Process(pid, priority, total_work)

    @staticmethod
    def generate_random_processes(num_processes: int = 10,
                                  max_priority: int = 2,
                                  max_work: int = 40,
                                  seed: int = None) -> List[Process]:
        """
        랜덤 프로세스 생성

        Args:
            num_processes: 생성할 프로세스 수
            max_priority: 최대 초기 우선순위
            max_work: 최대 총 작업 시간
            seed: 랜덤 시드

        Returns:
            프로세스 리스트
        """
        rng = random.Random(seed)

        processes = []
        for pid in range(1, num_processes + 1):
            # 30% 확률로 짧은 대화형 작업
            if rng.random() < 0.3:
                total_work = rng.randint(1, max(1, max_work // 8))
            else:
                total_work = rng.randint(max(1, max_work // 4), max_work)
            priority = rng.randint(0, max_priority)
            processes.append(Process(pid, priority, total_work))

        print(f"{num_processes}개의 랜덤 프로세스를 생성했습니다")
        return processes

    @staticmethod
    def save_processes_to_file(processes: List[Process], filename: str):
        """
        프로세스 리스트를 파일로 저장

        Args:
            processes: 저장할 프로세스 리스트
            filename: 출력 파일 경로
        """
        try:
            with open(filename, 'w', encoding='utf-8') as f:
                f.write("# MLFQ Simulator Input Data\n")
                f.write("# Format: PID,Priority,TotalWork\n\n")

                for process in processes:
                    f.write(f"{process.pid},{process.initial_priority},{process.total_work}\n")

            print(f"{len(processes)}개의 프로세스를 {filename}에 성공적으로 저장했습니다")

        except OSError as e:
            print(f"파일 저장 오류: {e}")

    @staticmethod
    def print_process_summary(processes: List[Process]):
        """프로세스 요약 정보 출력"""
        print("\n" + "="*60)
        print("프로세스 요약")
        print("="*60)
        print(f"{'PID':<6} {'우선순위':>10} {'총 작업':>12}")
        print("-"*60)

        for p in sorted(processes, key=lambda x: x.pid):
            print(f"{p.pid:<6} {p.initial_priority:>10} {p.total_work:>12}")

        print("="*60 + "\n")

        total = sum(p.total_work for p in processes)
        print(f"전체 프로세스: {len(processes)}개, 총 작업 시간: {total}")
        print()
